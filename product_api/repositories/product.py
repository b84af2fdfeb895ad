"""
Product repository for data access layer following Repository pattern
"""

from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from product_api.core.errors import PersistenceError
from product_api.core.logger import logger
from product_api.models.product import Product
from product_api.schemas.product import ProductCreate, ProductUpdate


def _to_object_id(product_id: str, operation: str) -> ObjectId:
    try:
        return ObjectId(product_id)
    except (InvalidId, TypeError) as e:
        logger.warning(
            f"Malformed product id: {product_id}",
            metadata={"event": f"{operation}_invalid_id", "product_id": product_id}
        )
        raise PersistenceError(operation, e)


class ProductRepository:
    """Repository for product data access operations"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    def _doc_to_product(self, doc: dict) -> Optional[Product]:
        """Convert MongoDB document to Product model"""
        if not doc:
            return None

        doc = dict(doc)
        doc["id"] = str(doc.pop("_id"))
        return Product.model_validate(doc)

    async def create(self, product_data: ProductCreate) -> Product:
        """Insert a new visible product"""
        now = datetime.now(timezone.utc)
        doc = {
            **product_data.model_dump(),
            "isVisible": True,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("MongoDB error creating product", error=e)
            raise PersistenceError("create_product", e)

        doc["_id"] = result.inserted_id
        return self._doc_to_product(doc)

    async def list_visible(self) -> List[Product]:
        """Fetch every product with isVisible set"""
        try:
            cursor = self.collection.find({"isVisible": True})
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("MongoDB error listing products", error=e)
            raise PersistenceError("list_products", e)

        return [self._doc_to_product(doc) for doc in docs]

    async def update(self, product_id: str, product_data: ProductUpdate) -> Optional[Product]:
        """
        Shallow merge of the fields set in product_data onto an existing product.
        Returns None if no product matched.
        """
        obj_id = _to_object_id(product_id, "update_product")

        changes = product_data.changes()
        changes["updatedAt"] = datetime.now(timezone.utc)

        try:
            doc = await self.collection.find_one_and_update(
                {"_id": obj_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("MongoDB error updating product", error=e)
            raise PersistenceError("update_product", e)

        return self._doc_to_product(doc)

    async def delete(self, product_id: str) -> bool:
        """Hard delete a product. Returns whether a document was removed."""
        obj_id = _to_object_id(product_id, "delete_product")

        try:
            result = await self.collection.delete_one({"_id": obj_id})
        except PyMongoError as e:
            logger.error("MongoDB error deleting product", error=e)
            raise PersistenceError("delete_product", e)

        return result.deleted_count > 0
