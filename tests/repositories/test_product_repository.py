"""Tests for the product repository"""
import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, Mock

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from product_api.core.errors import PersistenceError
from product_api.repositories.product import ProductRepository
from product_api.schemas.product import ProductCreate, ProductUpdate


@pytest.fixture
def mock_collection():
    """Mock Motor collection"""
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def product_doc(product_id):
    """Stored product document"""
    return {
        "_id": ObjectId(product_id),
        "name": "Widget",
        "description": "A widget",
        "price": 9.99,
        "isVisible": True,
        "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "updatedAt": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_inserts_visible_product(self, mock_collection, product_id):
        mock_collection.insert_one.return_value = Mock(inserted_id=ObjectId(product_id))
        repository = ProductRepository(mock_collection)

        product = await repository.create(
            ProductCreate.model_validate({"name": "Widget", "description": "A widget", "price": "9.99"})
        )

        inserted = mock_collection.insert_one.await_args.args[0]
        assert inserted["price"] == 9.99
        assert inserted["isVisible"] is True
        assert inserted["createdAt"] == inserted["updatedAt"]
        assert product.id == product_id
        assert product.price == 9.99
        assert product.is_visible is True

    @pytest.mark.asyncio
    async def test_create_database_error(self, mock_collection):
        mock_collection.insert_one.side_effect = PyMongoError("connection refused")
        repository = ProductRepository(mock_collection)

        with pytest.raises(PersistenceError) as exc_info:
            await repository.create(ProductCreate(name="Widget", description="A widget", price=1))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Server error"
        assert isinstance(exc_info.value.cause, PyMongoError)


class TestListVisible:

    @pytest.mark.asyncio
    async def test_list_queries_visible_only(self, mock_collection, product_doc):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[product_doc])
        mock_collection.find.return_value = cursor
        repository = ProductRepository(mock_collection)

        products = await repository.list_visible()

        mock_collection.find.assert_called_once_with({"isVisible": True})
        cursor.to_list.assert_awaited_once_with(length=None)
        assert [p.name for p in products] == ["Widget"]
        assert product_doc["_id"] == ObjectId("507f1f77bcf86cd799439011")

    @pytest.mark.asyncio
    async def test_list_database_error(self, mock_collection):
        mock_collection.find.side_effect = PyMongoError("timeout")
        repository = ProductRepository(mock_collection)

        with pytest.raises(PersistenceError):
            await repository.list_visible()


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_merges_known_fields(self, mock_collection, product_doc, product_id):
        mock_collection.find_one_and_update.return_value = {**product_doc, "price": 12.5}
        repository = ProductRepository(mock_collection)

        product = await repository.update(
            product_id, ProductUpdate.model_validate({"price": "12.5", "color": "red"})
        )

        args = mock_collection.find_one_and_update.await_args
        assert args.args[0] == {"_id": ObjectId(product_id)}
        changes = args.args[1]["$set"]
        assert changes["price"] == 12.5
        assert "color" not in changes
        assert "updatedAt" in changes
        assert args.kwargs["return_document"] == ReturnDocument.AFTER
        assert product.price == 12.5
        assert product.name == "Widget"

    @pytest.mark.asyncio
    async def test_update_uses_stored_field_names(self, mock_collection, product_doc, product_id):
        mock_collection.find_one_and_update.return_value = {**product_doc, "name": "7", "isVisible": False}
        repository = ProductRepository(mock_collection)

        product = await repository.update(
            product_id, ProductUpdate.model_validate({"name": 7, "isVisible": False})
        )

        changes = mock_collection.find_one_and_update.await_args.args[1]["$set"]
        assert changes["name"] == "7"
        assert changes["isVisible"] is False
        assert "is_visible" not in changes
        assert product.is_visible is False

    @pytest.mark.asyncio
    async def test_update_unknown_id_returns_none(self, mock_collection, product_id):
        mock_collection.find_one_and_update.return_value = None
        repository = ProductRepository(mock_collection)

        assert await repository.update(product_id, ProductUpdate(name="New")) is None

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, mock_collection):
        repository = ProductRepository(mock_collection)

        with pytest.raises(PersistenceError):
            await repository.update("not-an-object-id", ProductUpdate(name="New"))

        mock_collection.find_one_and_update.assert_not_awaited()


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_collection, product_id):
        mock_collection.delete_one.return_value = Mock(deleted_count=1)
        repository = ProductRepository(mock_collection)

        assert await repository.delete(product_id) is True
        mock_collection.delete_one.assert_awaited_once_with({"_id": ObjectId(product_id)})

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_collection, product_id):
        mock_collection.delete_one.return_value = Mock(deleted_count=0)
        repository = ProductRepository(mock_collection)

        assert await repository.delete(product_id) is False

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, mock_collection):
        repository = ProductRepository(mock_collection)

        with pytest.raises(PersistenceError):
            await repository.delete("123")

    @pytest.mark.asyncio
    async def test_delete_database_error(self, mock_collection, product_id):
        mock_collection.delete_one.side_effect = PyMongoError("not primary")
        repository = ProductRepository(mock_collection)

        with pytest.raises(PersistenceError):
            await repository.delete(product_id)
