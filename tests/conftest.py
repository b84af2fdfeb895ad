"""Shared test fixtures"""
import time
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import jwt
import pytest
from fastapi.testclient import TestClient

from main import app
from product_api.core.config import config
from product_api.dependencies.product import get_product_repository
from product_api.models.product import Product
from product_api.models.user import Identity
from product_api.pipeline.context import RequestContext
from product_api.repositories.product import ProductRepository


@pytest.fixture
def product_id():
    """Sample product ID for testing"""
    return "507f1f77bcf86cd799439011"


@pytest.fixture
def sample_product(product_id):
    """Sample visible product"""
    return Product(
        id=product_id,
        name="Widget",
        description="A widget",
        price=9.99,
        is_visible=True,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_token():
    """Build a signed JWT with the service secret"""
    def _make_token(claims: dict, secret: str = None, expires_in: int = 3600) -> str:
        payload = {"exp": int(time.time()) + expires_in, **claims}
        return jwt.encode(payload, secret or config.jwt_secret, algorithm=config.jwt_algorithm)
    return _make_token


@pytest.fixture
def user_headers(make_token):
    """Authorization header for a regular user"""
    return {"Authorization": f"Bearer {make_token({'id': 'user123', 'isAdmin': False})}"}


@pytest.fixture
def admin_headers(make_token):
    """Authorization header for an admin"""
    return {"Authorization": f"Bearer {make_token({'id': 'admin123', 'isAdmin': True})}"}


@pytest.fixture
def mock_repository():
    """Product repository with every data access method mocked"""
    return AsyncMock(spec=ProductRepository)


@pytest.fixture
def client(mock_repository):
    """Test client with the repository swapped for the mock"""
    app.dependency_overrides[get_product_repository] = lambda: mock_repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_request():
    """Minimal stand-in for a FastAPI request"""
    request = Mock()
    request.method = "PUT"
    request.url.path = "/api/products/507f1f77bcf86cd799439011"
    request.headers = {}
    return request


@pytest.fixture
def make_context(mock_request):
    """Build a RequestContext around the mock request"""
    def _make_context(identity: Identity = None, body: dict = None, path_params: dict = None, resolver=None):
        if resolver is None:
            resolver = AsyncMock()
            resolver.resolve.return_value = identity
        return RequestContext(
            request=mock_request,
            identity_resolver=resolver,
            body=body or {},
            path_params=path_params or {},
            identity=identity,
        )
    return _make_context


@pytest.fixture
def regular_user():
    return Identity(id="user123", is_admin=False)


@pytest.fixture
def admin_user():
    return Identity(id="admin123", is_admin=True)
