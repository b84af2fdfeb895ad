"""
Data access layer
"""

from .product import ProductRepository

__all__ = ["ProductRepository"]
