# Security Stages
"""
Request checks that short-circuit the pipeline when a request is rejected.

Each check is a pure pre-check: it either rejects the exchange (writing the
status and message, then completing it) or awaits ``call_next`` untouched.
"""

import logging
from typing import Optional

from ..models.exchange import Exchange
from ..models.policy import (
    AuthenticationPolicy,
    BlockedPathPolicy,
    InputValidationPolicy,
    SecureTransportPolicy,
)
from ..pipeline.stage import Continuation
from ..services.observation_sink import ObservationSink
from .base import PolicyStage
from .paths import matches_any_prefix

logger = logging.getLogger("pipeline.stages.security")


class SecureTransportStage(PolicyStage):
    """Rejects requests that do not carry the secure-transport marker (403)."""

    name = "secure_transport"
    logger = logger
    message = "Simulated HTTPS required."

    def __init__(self, policy: Optional[SecureTransportPolicy] = None, sink: Optional[ObservationSink] = None):
        super().__init__(sink)
        self.policy = policy or SecureTransportPolicy()

    async def dispatch(self, exchange: Exchange, call_next: Continuation) -> None:
        if exchange.query.get(self.policy.query_param) != self.policy.expected_value:
            self.reject(exchange, 403, self.message, "blocked_insecure_request")
            return
        await call_next()


class AuthenticationStage(PolicyStage):
    """
    Requires the authentication marker unless the path is exempt (401).

    Exempt paths match exactly; exempt prefixes match on path segments.
    The outcome is stored in ``exchange.state["authenticated"]``.
    """

    name = "authentication"
    logger = logger
    message = "Authentication required."

    def __init__(self, policy: Optional[AuthenticationPolicy] = None, sink: Optional[ObservationSink] = None):
        super().__init__(sink)
        self.policy = policy or AuthenticationPolicy()

    def is_exempt(self, path: str) -> bool:
        return path in self.policy.exempt_paths or matches_any_prefix(path, self.policy.exempt_prefixes)

    async def dispatch(self, exchange: Exchange, call_next: Continuation) -> None:
        authenticated = exchange.query.get(self.policy.query_param) == self.policy.expected_value
        exchange.state["authenticated"] = authenticated

        if self.is_exempt(exchange.path):
            await call_next()
            return

        if not authenticated:
            self.reject(exchange, 401, self.message, "authentication_failed")
            return
        await call_next()


class BlockedPathStage(PolicyStage):
    """Rejects any request under a blocked path prefix (401)."""

    name = "blocked_paths"
    logger = logger
    message = "Unauthorized Access."

    def __init__(self, policy: Optional[BlockedPathPolicy] = None, sink: Optional[ObservationSink] = None):
        super().__init__(sink)
        self.policy = policy or BlockedPathPolicy()

    async def dispatch(self, exchange: Exchange, call_next: Continuation) -> None:
        if matches_any_prefix(exchange.path, self.policy.prefixes):
            self.reject(exchange, 401, self.message, "unauthorized_access_attempt")
            return
        await call_next()


class InputValidationStage(PolicyStage):
    """Rejects query input containing a blocked pattern (400). Empty input passes."""

    name = "input_validation"
    logger = logger
    message = "Invalid Input."

    def __init__(self, policy: Optional[InputValidationPolicy] = None, sink: Optional[ObservationSink] = None):
        super().__init__(sink)
        self.policy = policy or InputValidationPolicy()

    def find_blocked_pattern(self, value: str) -> Optional[str]:
        for pattern in self.policy.blocked_patterns:
            if pattern and pattern in value:
                return pattern
        return None

    async def dispatch(self, exchange: Exchange, call_next: Continuation) -> None:
        value = exchange.query.get(self.policy.query_param)
        if value:
            pattern = self.find_blocked_pattern(value)
            if pattern is not None:
                self.reject(exchange, 400, self.message, "validation_failed", pattern=pattern)
                return
        await call_next()
