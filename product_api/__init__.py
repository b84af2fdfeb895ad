"""
Product Service - role-gated product catalogue API
"""

__version__ = "1.0.0"
