# System Models
"""Response models for the system endpoints."""

from typing import List

from pydantic import BaseModel, Field


class StageInfo(BaseModel):
    """A compiled pipeline stage."""

    position: int = Field(..., description="Position in execution order")
    name: str = Field(..., description="Stage name")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Service status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Deployment environment")
    stages: List[StageInfo] = Field(default_factory=list, description="Compiled pipeline stages")
