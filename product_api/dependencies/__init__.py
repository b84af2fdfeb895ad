"""
Dependencies module initialization
"""

from .auth import JwtIdentityResolver, get_identity_resolver
from .product import get_product_repository, get_product_service

__all__ = [
    "JwtIdentityResolver",
    "get_identity_resolver",
    "get_product_repository",
    "get_product_service",
]
