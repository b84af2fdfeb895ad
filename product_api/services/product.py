"""
Product service: one handler per product route.

Each handler runs after its route's gates have passed, performs a single
repository call and maps the result to an Outcome.
"""

from fastapi import status

from product_api.core.logger import logger
from product_api.pipeline.context import RequestContext
from product_api.pipeline.outcomes import Ok, Outcome
from product_api.repositories.product import ProductRepository
from product_api.schemas.product import ProductCreate, ProductUpdate


class ProductService:
    """Handlers for the product resource"""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def create_product(self, ctx: RequestContext) -> Outcome:
        """Insert a product from the validated body; isVisible starts true"""
        product_data = ProductCreate.model_validate(ctx.body)
        product = await self.repository.create(product_data)

        logger.info(
            f"Created product {product.id}",
            user_id=ctx.identity.id,
            metadata={"event": "create_product", "product_id": product.id}
        )

        return Ok(product, status_code=status.HTTP_201_CREATED)

    async def list_products(self, ctx: RequestContext) -> Outcome:
        """All visible products, unpaginated"""
        products = await self.repository.list_visible()

        logger.info(
            f"Fetched {len(products)} products",
            user_id=ctx.identity.id,
            metadata={"event": "list_products", "count": len(products)}
        )

        return Ok(products)

    async def update_product(self, ctx: RequestContext) -> Outcome:
        """
        Shallow merge of the body onto the product; fields not sent keep their values.
        An id that matches nothing answers 200 with a null body.
        """
        product_id = ctx.path_params["product_id"]
        product_data = ProductUpdate.model_validate(ctx.body)
        product = await self.repository.update(product_id, product_data)

        logger.info(
            f"Updated product {product_id}",
            user_id=ctx.identity.id,
            metadata={
                "event": "update_product",
                "product_id": product_id,
                "fields": sorted(product_data.changes().keys()),
                "matched": product is not None,
            }
        )

        return Ok(product)

    async def delete_product(self, ctx: RequestContext) -> Outcome:
        # No existence check: deleting an unknown id answers the same way.
        product_id = ctx.path_params["product_id"]
        deleted = await self.repository.delete(product_id)

        logger.info(
            f"Deleted product {product_id}",
            user_id=ctx.identity.id,
            metadata={"event": "delete_product", "product_id": product_id, "deleted": deleted}
        )

        return Ok({"msg": "Product deleted"})
