"""
Database connection management
"""

from .mongodb import connect_to_mongo, close_mongo_connection, get_database, get_product_collection

__all__ = [
    "connect_to_mongo",
    "close_mongo_connection",
    "get_database",
    "get_product_collection",
]
