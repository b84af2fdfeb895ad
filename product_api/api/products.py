"""
Product API endpoints

Every route builds a RequestContext and hands it to its pipeline:
authenticate -> require_admin (mutations) -> validate_body (create/update) -> handler
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from product_api.dependencies.auth import JwtIdentityResolver, get_identity_resolver
from product_api.dependencies.product import get_product_service
from product_api.models.product import Product
from product_api.pipeline.builder import Pipeline
from product_api.pipeline.context import RequestContext
from product_api.pipeline.gates import authenticate, require_admin, validate_body
from product_api.pipeline.outcomes import error_responses
from product_api.pipeline.validation import CREATE_PRODUCT_RULES, UPDATE_PRODUCT_RULES
from product_api.services.product import ProductService

router = APIRouter()

create_pipeline = Pipeline("create_product", authenticate, validate_body(CREATE_PRODUCT_RULES))
list_pipeline = Pipeline("list_products", authenticate)
update_pipeline = Pipeline(
    "update_product", authenticate, require_admin, validate_body(UPDATE_PRODUCT_RULES)
)
delete_pipeline = Pipeline("delete_product", authenticate, require_admin)


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400, 401, 500),
)
async def create_product(
    request: Request,
    resolver: JwtIdentityResolver = Depends(get_identity_resolver),
    service: ProductService = Depends(get_product_service),
):
    """
    Create a product from `{name, description, price}`.
    Requires authentication.
    """
    ctx = await RequestContext.from_request(request, resolver)
    return await create_pipeline.respond(ctx, service.create_product)


@router.get(
    "",
    response_model=List[Product],
    responses=error_responses(401, 500),
)
async def list_products(
    request: Request,
    resolver: JwtIdentityResolver = Depends(get_identity_resolver),
    service: ProductService = Depends(get_product_service),
):
    """
    List every visible product.
    Requires authentication.
    """
    ctx = await RequestContext.from_request(request, resolver)
    return await list_pipeline.respond(ctx, service.list_products)


@router.put(
    "/{product_id}",
    response_model=Optional[Product],
    responses=error_responses(400, 401, 403, 500),
)
async def update_product(
    product_id: str,
    request: Request,
    resolver: JwtIdentityResolver = Depends(get_identity_resolver),
    service: ProductService = Depends(get_product_service),
):
    """
    Update any subset of a product's fields.
    Requires admin authentication.
    """
    ctx = await RequestContext.from_request(request, resolver)
    return await update_pipeline.respond(ctx, service.update_product)


@router.delete(
    "/{product_id}",
    responses=error_responses(401, 403, 500),
)
async def delete_product(
    product_id: str,
    request: Request,
    resolver: JwtIdentityResolver = Depends(get_identity_resolver),
    service: ProductService = Depends(get_product_service),
):
    """
    Delete a product.
    Requires admin authentication.
    """
    ctx = await RequestContext.from_request(request, resolver)
    return await delete_pipeline.respond(ctx, service.delete_product)
