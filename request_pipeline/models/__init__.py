# Request Pipeline Models
"""Exchange, policy and API response models."""

from .exchange import Exchange
from .policy import (
    AsyncProcessingPolicy,
    AuthenticationPolicy,
    BlockedPathPolicy,
    InputValidationPolicy,
    SecureTransportPolicy,
    SecurityLoggingPolicy,
    SecurityPolicy,
)
from .system import HealthResponse, StageInfo

__all__ = [
    "AsyncProcessingPolicy",
    "AuthenticationPolicy",
    "BlockedPathPolicy",
    "Exchange",
    "HealthResponse",
    "InputValidationPolicy",
    "SecureTransportPolicy",
    "SecurityLoggingPolicy",
    "SecurityPolicy",
    "StageInfo",
]
