# Pipeline Builder
"""Accumulates stages in registration order and compiles them into a Pipeline."""

import logging
from typing import List, Optional

from ..errors import ConfigurationError
from ..routing import Router
from .executor import Pipeline
from .stage import Stage, StageHandler, TerminalHandler, is_async_callable, stage_name

logger = logging.getLogger("pipeline.builder")


class PipelineBuilder:
    """
    Ordered registry of stages.

    Usage:
        builder = PipelineBuilder()
        builder.register(require_marker)

        @builder.use
        async def log_request(exchange, call_next):
            ...
            await call_next()

        pipeline = builder.build(router)
    """

    def __init__(self, strict_contracts: bool = True):
        self._stages: List[Stage] = []
        self._strict_contracts = strict_contracts
        self._built = False

    @property
    def is_built(self) -> bool:
        return self._built

    def __len__(self) -> int:
        return len(self._stages)

    def register(self, handler: StageHandler, name: Optional[str] = None) -> "PipelineBuilder":
        """
        Append a stage to the chain.

        Args:
            handler: Coroutine function or BaseStage taking (exchange, call_next)
            name: Display name (defaults to the handler's name)

        Returns:
            The builder, for chaining

        Raises:
            ConfigurationError: If the pipeline was already built or the
                handler is not async
        """
        if self._built:
            raise ConfigurationError("Cannot register stages after the pipeline has been built")
        if not callable(handler) or not is_async_callable(handler):
            raise ConfigurationError(
                f"Stage {handler!r} must be a coroutine function or define an async __call__"
            )

        stage = Stage(
            position=len(self._stages),
            handler=handler,
            name=name or stage_name(handler),
        )
        self._stages.append(stage)
        logger.debug(f"Registered stage {stage.name} at position {stage.position}")
        return self

    def use(self, handler: StageHandler) -> StageHandler:
        """Decorator form of ``register``."""
        self.register(handler)
        return handler

    def build(self, terminal: Optional[TerminalHandler]) -> Pipeline:
        """
        Freeze the registered stages into a compiled Pipeline.

        Raises:
            ConfigurationError: If already built, or the terminal handler is
                missing, not async, or an empty router
        """
        if self._built:
            raise ConfigurationError("Pipeline has already been built")
        if terminal is None:
            raise ConfigurationError("A terminal handler is required")
        if not callable(terminal) or not is_async_callable(terminal):
            raise ConfigurationError(f"Terminal handler {terminal!r} must be async")
        if isinstance(terminal, Router) and terminal.is_empty:
            raise ConfigurationError("Terminal router has no routes")

        self._built = True
        pipeline = Pipeline(self._stages, terminal, strict_contracts=self._strict_contracts)
        logger.info(
            f"Pipeline built with {len(pipeline)} stage(s): "
            f"{', '.join(name for _, name in pipeline.describe()) or '(none)'}"
        )
        return pipeline
