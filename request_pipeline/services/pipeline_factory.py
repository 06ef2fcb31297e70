# Pipeline Factory
"""Compiles the security policy into a ready-to-run pipeline."""

import logging
from typing import Optional

from ..config import settings
from ..endpoints import create_router
from ..models.policy import SecurityPolicy
from ..pipeline import Pipeline, PipelineBuilder, TerminalHandler
from ..stages import (
    AsyncProcessingStage,
    AuthenticationStage,
    BlockedPathStage,
    InputValidationStage,
    SecureTransportStage,
    SecurityLoggingStage,
)
from .observation_sink import LoggingObservationSink, ObservationSink
from .policy_service import PolicyService, policy_service

logger = logging.getLogger("pipeline.services.pipeline_factory")


def build_security_pipeline(
    policy: SecurityPolicy,
    sink: Optional[ObservationSink] = None,
    terminal: Optional[TerminalHandler] = None,
    strict_contracts: bool = True,
) -> Pipeline:
    """
    Register the enabled policy stages in order and build the pipeline.

    Order: secure transport, authentication, blocked paths, input
    validation, async processing, security logging, then the terminal
    handler (the demo router by default).
    """
    sink = sink or LoggingObservationSink()
    builder = PipelineBuilder(strict_contracts=strict_contracts)

    if policy.secure_transport.enabled:
        builder.register(SecureTransportStage(policy.secure_transport, sink))
    if policy.authentication.enabled:
        builder.register(AuthenticationStage(policy.authentication, sink))
    if policy.blocked_paths.enabled:
        builder.register(BlockedPathStage(policy.blocked_paths, sink))
    if policy.input_validation.enabled:
        builder.register(InputValidationStage(policy.input_validation, sink))
    if policy.async_processing.enabled:
        builder.register(AsyncProcessingStage(policy.async_processing, sink))
    if policy.security_logging.enabled:
        builder.register(SecurityLoggingStage(sink))

    return builder.build(terminal if terminal is not None else create_router())


class PipelineFactory:
    """Builds the service pipeline once and hands out the shared instance."""

    def __init__(self, policies: Optional[PolicyService] = None, sink: Optional[ObservationSink] = None):
        self._policies = policies or policy_service
        self._sink = sink
        self._pipeline: Optional[Pipeline] = None

    def get(self) -> Pipeline:
        if self._pipeline is None:
            self._pipeline = build_security_pipeline(
                self._policies.policy,
                sink=self._sink,
                strict_contracts=settings.enforce_contracts,
            )
        return self._pipeline

    def reload(self) -> Pipeline:
        """Reload the policy file and rebuild the pipeline."""
        logger.info(f"Rebuilding pipeline from {self._policies.policy_file}")
        self._policies.reload()
        self._pipeline = None
        return self.get()


# Global pipeline factory instance
pipeline_factory = PipelineFactory()
