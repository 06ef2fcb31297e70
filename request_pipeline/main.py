# Request Pipeline Main Entry Point
"""FastAPI host for the request pipeline.

Usage:
    Direct: python -m request_pipeline.main
    Server: uvicorn request_pipeline.main:app --host 0.0.0.0 --port 8080
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.v1.routers import gateway as gateway_router
from .api.v1.routers import system as system_router
from .config import settings
from .services.pipeline_factory import pipeline_factory

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("pipeline.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - compile the pipeline before serving."""
    # Startup
    logger.info(f"Starting {settings.service_name} v{settings.service_version} ({settings.environment})")
    pipeline = pipeline_factory.get()
    logger.info(f"Pipeline ready: {len(pipeline)} stage(s), strict contracts={pipeline.strict_contracts}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.service_name}")


app = FastAPI(
    title=settings.service_name,
    version=settings.service_version,
    debug=settings.debug,
    lifespan=lifespan,
    openapi_url=None,
    docs_url=None,
    redoc_url=None,
)

# System routes first so the gateway catch-all does not shadow them
app.include_router(system_router.router)
app.include_router(gateway_router.router)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting with HTTP on port {settings.port}")
    uvicorn.run(
        "request_pipeline.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
