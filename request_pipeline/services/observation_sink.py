# Observation Sink
"""
Structured observations emitted by stages.

Stages that report what they saw (blocked requests, audit trail, timing)
receive a sink at construction time instead of writing to a global logger.
"""

import logging
import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from ..models.exchange import Exchange


@dataclass(frozen=True)
class Observation:
    """One structured record emitted by a stage."""

    category: str
    event: str
    path: str
    remote_address: Optional[str] = None
    exchange_id: Optional[str] = None
    detail: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def for_exchange(cls, exchange: Exchange, category: str, event: str, **detail: Any) -> "Observation":
        return cls(
            category=category,
            event=event,
            path=exchange.path,
            remote_address=exchange.remote_address,
            exchange_id=exchange.exchange_id,
            detail=detail,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


class ObservationSink(Protocol):
    """Anything that accepts observations."""

    def record(self, observation: Observation) -> None:
        ...


class LoggingObservationSink:
    """Writes observations through the standard logging module."""

    def __init__(self, logger_name: str = "pipeline.observations", level: int = logging.INFO):
        self._logger = logging.getLogger(logger_name)
        self._level = level

    def record(self, observation: Observation) -> None:
        self._logger.log(
            self._level,
            f"[{observation.category}] {observation.event}: path={observation.path} "
            f"ip={observation.remote_address}",
            extra={"observation": observation.to_dict()},
        )


class MemoryObservationSink:
    """Keeps observations in memory, in arrival order."""

    def __init__(self):
        self._records: List[Observation] = []
        self._lock = threading.Lock()

    def record(self, observation: Observation) -> None:
        with self._lock:
            self._records.append(observation)

    @property
    def records(self) -> List[Observation]:
        with self._lock:
            return list(self._records)

    def events(self) -> List[str]:
        return [r.event for r in self.records]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

