# Request Pipeline Errors
"""Exception hierarchy for the pipeline engine."""

from typing import Optional


class PipelineError(Exception):
    """Base class for all errors raised by the pipeline engine."""


class ConfigurationError(PipelineError):
    """Raised when a pipeline is assembled incorrectly. Fatal at startup."""


class ContractViolation(PipelineError):
    """Raised when a stage breaks the stage contract."""


class ExchangeCompletedError(ContractViolation):
    """Raised when a completed exchange is mutated."""


class RoutingError(PipelineError):
    """Raised when no terminal handler matches the exchange path."""

    def __init__(self, path: str):
        super().__init__(f"No handler registered for path: {path}")
        self.path = path


class StageFault(PipelineError):
    """
    Raised when a stage (or the terminal handler) fails with an unexpected error.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, stage_name: str, position: Optional[int], message: str = ""):
        where = f"stage '{stage_name}'" if position is None else f"stage '{stage_name}' (position {position})"
        super().__init__(f"Fault in {where}: {message}" if message else f"Fault in {where}")
        self.stage_name = stage_name
        self.position = position
