# Policy Stage Base
"""Shared plumbing for stages that report to an observation sink."""

import logging
from typing import Any, Optional

from ..models.exchange import Exchange
from ..pipeline.stage import BaseStage
from ..services.observation_sink import LoggingObservationSink, Observation, ObservationSink

SECURITY = "SECURITY"
PERFORMANCE = "PERFORMANCE"
SECURITY_LOG = "SECURITY LOG"


class PolicyStage(BaseStage):
    """BaseStage with an injected observation sink and a rejection helper."""

    category: str = SECURITY
    logger: logging.Logger = logging.getLogger("pipeline.stages")

    def __init__(self, sink: Optional[ObservationSink] = None):
        self.sink = sink or LoggingObservationSink()

    def observe(self, exchange: Exchange, event: str, category: Optional[str] = None, **detail: Any) -> None:
        self.sink.record(Observation.for_exchange(exchange, category or self.category, event, **detail))

    def reject(self, exchange: Exchange, status_code: int, message: str, event: str, **detail: Any) -> None:
        """Record the rejection, then short-circuit with the given response."""
        self.logger.debug(f"[{exchange.exchange_id}] {self.name} rejected {exchange.path} with {status_code}")
        self.observe(exchange, event, status=status_code, **detail)
        exchange.reject(status_code, message)
