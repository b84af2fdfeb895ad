"""
OpenTelemetry instrumentation for FastAPI and PyMongo.
Export is left to the collector configured for the deployment.
"""

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor

from product_api.core.logger import logger


def instrument_app(app):
    """
    Instrument FastAPI application with OpenTelemetry for automatic span creation.

    Args:
        app: FastAPI application instance
    """
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumented with OpenTelemetry")

        instrumentor = PymongoInstrumentor()
        if not instrumentor.is_instrumented_by_opentelemetry:
            instrumentor.instrument()
            logger.info("PyMongo instrumented with OpenTelemetry")

    except Exception as e:
        logger.error("Failed to instrument application", error=e)
