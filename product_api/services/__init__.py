"""
Service layer: resource handlers behind the request pipeline
"""

from .product import ProductService

__all__ = ["ProductService"]
