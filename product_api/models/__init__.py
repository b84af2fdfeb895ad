"""
Domain models
"""

from .product import Product
from .user import Identity

__all__ = ["Product", "Identity"]
