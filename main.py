"""
FastAPI Application - Product Service
"""

# Load environment variables from .env file FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI

from product_api.api import health, products
from product_api.core.config import config
from product_api.core.errors import ErrorResponse, error_response_handler
from product_api.core.logger import logger
from product_api.core.telemetry import instrument_app
from product_api.db.mongodb import close_mongo_connection, connect_to_mongo
from product_api.middleware import CorrelationIdMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting Product Service...")
    await connect_to_mongo()

    logger.info(
        "Product Service started successfully",
        metadata={
            "service_name": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
            "port": config.port
        }
    )

    yield

    # Shutdown
    logger.info("Shutting down Product Service...")
    await close_mongo_connection()


app = FastAPI(
    title="Product Service",
    description="Product catalogue with authenticated reads and admin-only mutations",
    version=config.service_version,
    lifespan=lifespan
)

instrument_app(app)

app.add_exception_handler(ErrorResponse, error_response_handler)

app.add_middleware(CorrelationIdMiddleware)

app.include_router(health.router, prefix=config.api_prefix, tags=["health"])
app.include_router(products.router, prefix=f"{config.api_prefix}/products", tags=["products"])


if __name__ == "__main__":
    import uvicorn

    logger.info(
        f"Starting {config.service_name} on port {config.port}",
        metadata={
            "service_name": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
            "port": config.port
        }
    )

    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.environment == "development"
    )
