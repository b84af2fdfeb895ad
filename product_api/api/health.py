"""
Health API endpoints
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from product_api.core.config import config
from product_api.core.logger import logger
from product_api.db.mongodb import db

router = APIRouter()


@router.get("/health")
def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.service_version,
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe - ready once MongoDB answers a ping"""
    try:
        if db.client is None:
            raise RuntimeError("MongoDB client not initialized")
        await db.client.admin.command("ping")
    except (PyMongoError, RuntimeError) as e:
        logger.warning(
            "Readiness check failed",
            metadata={"event": "readiness_check_failed", "error": str(e)}
        )
        return JSONResponse(
            status_code=503,
            content={
                "status": "not ready",
                "service": config.service_name,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    return {
        "status": "ready",
        "service": config.service_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
