# Policy Stages
"""Reference stages that implement the security policy."""

from .base import PolicyStage
from .paths import starts_with_segments
from .processing import AsyncProcessingStage, SecurityLoggingStage
from .security import (
    AuthenticationStage,
    BlockedPathStage,
    InputValidationStage,
    SecureTransportStage,
)

__all__ = [
    "AsyncProcessingStage",
    "AuthenticationStage",
    "BlockedPathStage",
    "InputValidationStage",
    "PolicyStage",
    "SecureTransportStage",
    "SecurityLoggingStage",
    "starts_with_segments",
]
