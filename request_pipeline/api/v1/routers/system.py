"""
System Router - Health and status endpoints.

Served directly by FastAPI, outside the request pipeline.
"""

from fastapi import APIRouter

from ....config import settings
from ....models import HealthResponse, StageInfo
from ....services.pipeline_factory import pipeline_factory

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Check service health.

    Returns:
        HealthResponse with service info and the compiled stage order
    """
    pipeline = pipeline_factory.get()
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.service_version,
        environment=settings.environment,
        stages=[StageInfo(position=position, name=name) for position, name in pipeline.describe()],
    )
