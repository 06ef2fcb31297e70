# Request Pipeline
"""Composable request-processing pipeline with short-circuiting async stages."""

from .errors import (
    ConfigurationError,
    ContractViolation,
    ExchangeCompletedError,
    PipelineError,
    RoutingError,
    StageFault,
)
from .models.exchange import Exchange
from .pipeline import BaseStage, Pipeline, PipelineBuilder
from .routing import Router

__version__ = "1.0.0"

__all__ = [
    "BaseStage",
    "ConfigurationError",
    "ContractViolation",
    "Exchange",
    "ExchangeCompletedError",
    "Pipeline",
    "PipelineBuilder",
    "PipelineError",
    "Router",
    "RoutingError",
    "StageFault",
]
