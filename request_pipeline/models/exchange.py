# Exchange Model
"""
Mutable per-request context passed through the pipeline.

An Exchange carries the parsed request (path, query, headers, remote address)
and the response being produced (status, raw body bytes). It is created by the listener
for each inbound request and handed by reference from stage to stage.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from ..errors import ExchangeCompletedError

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599


@dataclass
class Exchange:
    """Request and response state for a single request lifecycle."""

    path: str = "/"
    query: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    remote_address: Optional[str] = None
    method: str = "GET"

    exchange_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: Dict[str, Any] = field(default_factory=dict)

    # Response side is only mutable through set_status/write/complete
    _status_code: Optional[int] = field(default=None, init=False, repr=False)
    _body: bytearray = field(default_factory=bytearray, init=False, repr=False)
    _completed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        self.headers = {k.lower(): v for k, v in self.headers.items()}

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def body(self) -> str:
        """Body as text. Undecodable bytes are replaced; use ``body_bytes`` for the raw content."""
        return self._body.decode("utf-8", errors="replace")

    def body_bytes(self) -> bytes:
        return bytes(self._body)

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)

    def set_status(self, status_code: int) -> None:
        """Set the response status code."""
        self._ensure_open()
        _validate_status(status_code)
        self._status_code = status_code

    def write(self, content: Union[str, bytes], status_code: Optional[int] = None) -> None:
        """
        Append content to the response body.

        Args:
            content: Text (encoded as UTF-8) or raw bytes, stored unchanged
            status_code: Optional status to set before writing
        """
        self._ensure_open()
        if status_code is not None:
            self.set_status(status_code)
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._body.extend(content)

    def complete(self) -> None:
        """Mark the exchange as finished. No further mutation is allowed."""
        self._completed = True

    def reject(self, status_code: int, message: str) -> None:
        """Write a short-circuit response and complete the exchange."""
        self.set_status(status_code)
        self.write(message)
        self.complete()

    def force_complete(self) -> None:
        """Complete the exchange without touching status or body."""
        self._completed = True

    def _ensure_open(self) -> None:
        if self._completed:
            raise ExchangeCompletedError(
                f"Exchange {self.exchange_id} for {self.path} is already completed"
            )


def _validate_status(status_code: int) -> None:
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        raise ValueError(f"Status code must be an integer, got {status_code!r}")
    if not MIN_STATUS_CODE <= status_code <= MAX_STATUS_CODE:
        raise ValueError(
            f"Status code must be between {MIN_STATUS_CODE} and {MAX_STATUS_CODE}, got {status_code}"
        )
