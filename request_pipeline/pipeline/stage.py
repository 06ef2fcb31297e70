# Stage Contract
"""
Stage contract for the request pipeline.

A stage receives the exchange and a continuation (``call_next``). It may
inspect or mutate the exchange, await ``call_next()`` at most once to run the
rest of the chain, and run code both before and after doing so. Not awaiting
``call_next`` short-circuits the chain; the stage must then complete the
exchange itself (usually via ``exchange.reject``).

Stages are either plain coroutine functions::

    async def timing(exchange, call_next):
        started = time.perf_counter()
        await call_next()
        exchange.state["elapsed"] = time.perf_counter() - started

or ``BaseStage`` subclasses implementing ``dispatch``.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable

from ..models.exchange import Exchange

Continuation = Callable[[], Awaitable[None]]
StageHandler = Callable[[Exchange, Continuation], Awaitable[None]]
TerminalHandler = Callable[[Exchange], Awaitable[None]]


class BaseStage(ABC):
    """Base class for class-based stages."""

    name: str = ""

    @abstractmethod
    async def dispatch(self, exchange: Exchange, call_next: Continuation) -> None:
        """Process the exchange and optionally continue the chain."""

    async def __call__(self, exchange: Exchange, call_next: Continuation) -> None:
        await self.dispatch(exchange, call_next)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={stage_name(self)!r}>"


@dataclass(frozen=True)
class Stage:
    """A registered stage: its position in the chain, handler and display name."""

    position: int
    handler: StageHandler
    name: str


def stage_name(handler) -> str:
    """Best-effort display name for a stage handler."""
    explicit = getattr(handler, "name", None)
    if isinstance(explicit, str) and explicit:
        return explicit
    if inspect.isfunction(handler) or inspect.ismethod(handler):
        return handler.__name__
    return type(handler).__name__


def is_async_callable(obj) -> bool:
    """True for coroutine functions and objects with an async ``__call__``."""
    if inspect.iscoroutinefunction(obj):
        return True
    call = getattr(obj, "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)
