# Pipeline Executor
"""
Compiled pipeline and continuation composition.

The pipeline holds an immutable, indexable tuple of stages plus the terminal
handler. Continuations are produced per exchange by ``continuation(exchange,
index)``: invoking the continuation for position *i* runs stage *i* with the
continuation for *i + 1*, and the continuation past the last stage runs the
terminal handler. Nothing request-specific is stored on the pipeline, so one
instance is shared by all concurrent exchanges.
"""

import logging
import time
from typing import List, Optional, Sequence, Tuple

from ..errors import ContractViolation, PipelineError, StageFault
from ..models.exchange import Exchange
from .stage import Continuation, Stage, TerminalHandler, stage_name

logger = logging.getLogger("pipeline.executor")


class _Continuation:
    """The rest of the chain from one position, for one exchange."""

    __slots__ = ("_pipeline", "_exchange", "_index", "_invoked")

    def __init__(self, pipeline: "Pipeline", exchange: Exchange, index: int):
        self._pipeline = pipeline
        self._exchange = exchange
        self._index = index
        self._invoked = False

    async def __call__(self) -> None:
        if self._invoked:
            self._pipeline._on_repeated_call(self._exchange, self._index)
            return
        self._invoked = True
        await self._pipeline._run_from(self._exchange, self._index)


class Pipeline:
    """
    Immutable compiled chain of stages plus a terminal handler.

    Built by ``PipelineBuilder.build``; reused for every exchange.
    """

    def __init__(
        self,
        stages: Sequence[Stage],
        terminal: TerminalHandler,
        strict_contracts: bool = True,
    ):
        self._stages: Tuple[Stage, ...] = tuple(stages)
        self._terminal = terminal
        self._terminal_name = stage_name(terminal)
        self._strict_contracts = strict_contracts

    @property
    def stages(self) -> Tuple[Stage, ...]:
        return self._stages

    @property
    def terminal(self) -> TerminalHandler:
        return self._terminal

    @property
    def strict_contracts(self) -> bool:
        return self._strict_contracts

    def __len__(self) -> int:
        return len(self._stages)

    def describe(self) -> List[Tuple[int, str]]:
        """Return ``(position, name)`` for each stage in execution order."""
        return [(stage.position, stage.name) for stage in self._stages]

    def continuation(self, exchange: Exchange, index: int) -> Continuation:
        """
        Build the continuation that resumes the chain at ``index``.

        ``index == len(self)`` resumes at the terminal handler.
        """
        if not 0 <= index <= len(self._stages):
            raise IndexError(f"Continuation index {index} out of range 0..{len(self._stages)}")
        return _Continuation(self, exchange, index)

    async def execute(self, exchange: Exchange) -> Exchange:
        """
        Run the chain for a single exchange.

        Returns:
            The same exchange, completed

        Raises:
            StageFault: A stage or the terminal handler failed
            ContractViolation: A stage broke the contract in strict mode
        """
        started = time.perf_counter()
        logger.debug(f"[{exchange.exchange_id}] Executing pipeline for {exchange.path}")

        await self.continuation(exchange, 0)()

        if not exchange.completed:
            logger.warning(
                f"[{exchange.exchange_id}] Chain ended without completing the exchange "
                f"for {exchange.path}; completing it"
            )
            exchange.complete()

        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.debug(
            f"[{exchange.exchange_id}] Pipeline finished for {exchange.path}: "
            f"status={exchange.status_code} duration_ms={duration_ms}"
        )
        return exchange

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    async def _run_from(self, exchange: Exchange, index: int) -> None:
        if exchange.completed:
            logger.debug(
                f"[{exchange.exchange_id}] Exchange already completed, not invoking "
                f"{self._name_at(index)}"
            )
            return

        if index == len(self._stages):
            await self._invoke(exchange, self._terminal_name, None, lambda: self._terminal(exchange))
            return

        stage = self._stages[index]
        call_next = self.continuation(exchange, index + 1)
        await self._invoke(
            exchange,
            stage.name,
            stage.position,
            lambda: stage.handler(exchange, call_next),
        )

    async def _invoke(self, exchange: Exchange, name: str, position: Optional[int], call) -> None:
        try:
            await call()
        except PipelineError:
            # Already classified (StageFault from further down, or an engine error)
            exchange.force_complete()
            raise
        except Exception as exc:
            exchange.force_complete()
            logger.error(f"[{exchange.exchange_id}] {name} raised {type(exc).__name__}: {exc}")
            raise StageFault(name, position, str(exc)) from exc

    def _on_repeated_call(self, exchange: Exchange, index: int) -> None:
        caller = self._name_at(index - 1) if index > 0 else "pipeline"
        message = f"{caller} invoked its continuation more than once"
        if self._strict_contracts:
            raise ContractViolation(message)
        logger.warning(f"[{exchange.exchange_id}] {message}; ignoring repeated call")

    def _name_at(self, index: int) -> str:
        if index >= len(self._stages):
            return self._terminal_name
        return self._stages[index].name
