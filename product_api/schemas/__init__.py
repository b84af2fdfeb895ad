"""
Request payload schemas
"""

from .product import ProductCreate, ProductUpdate

__all__ = ["ProductCreate", "ProductUpdate"]
