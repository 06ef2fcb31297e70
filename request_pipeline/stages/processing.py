# Processing Stages
"""Stages that always continue: async work before continuing, and audit logging."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from ..models.exchange import Exchange
from ..models.policy import AsyncProcessingPolicy
from ..pipeline.stage import Continuation
from ..services.observation_sink import ObservationSink
from .base import PERFORMANCE, SECURITY_LOG, PolicyStage

logger = logging.getLogger("pipeline.stages.processing")

SideEffect = Callable[[Exchange], Awaitable[None]]


class AsyncProcessingStage(PolicyStage):
    """
    Performs time-bounded asynchronous work, then continues the chain.

    The default side effect sleeps for ``delay_ms`` to simulate I/O. The work
    is bounded by ``timeout_ms``; on timeout the work is cancelled, a warning
    is logged and the chain continues.
    """

    name = "async_processing"
    category = PERFORMANCE
    logger = logger

    def __init__(
        self,
        policy: Optional[AsyncProcessingPolicy] = None,
        sink: Optional[ObservationSink] = None,
        side_effect: Optional[SideEffect] = None,
    ):
        super().__init__(sink)
        self.policy = policy or AsyncProcessingPolicy()
        self.side_effect = side_effect or self._simulated_io

    async def _simulated_io(self, exchange: Exchange) -> None:
        await asyncio.sleep(self.policy.delay_ms / 1000)

    async def dispatch(self, exchange: Exchange, call_next: Continuation) -> None:
        started = time.perf_counter()
        timed_out = False
        try:
            await asyncio.wait_for(self.side_effect(exchange), timeout=self.policy.timeout_ms / 1000)
        except asyncio.TimeoutError:
            timed_out = True
            logger.warning(
                f"[{exchange.exchange_id}] Async work for {exchange.path} exceeded "
                f"{self.policy.timeout_ms}ms; continuing"
            )

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        self.observe(exchange, "processed_async", elapsed_ms=elapsed_ms, timed_out=timed_out)
        await call_next()


class SecurityLoggingStage(PolicyStage):
    """Records the path and remote address of every request, then continues."""

    name = "security_logging"
    category = SECURITY_LOG
    logger = logger

    async def dispatch(self, exchange: Exchange, call_next: Continuation) -> None:
        self.observe(exchange, "request_observed", method=exchange.method)
        await call_next()
