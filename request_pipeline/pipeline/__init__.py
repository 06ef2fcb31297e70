# Pipeline Engine
"""Stage contract, builder and executor."""

from .builder import PipelineBuilder
from .executor import Pipeline
from .stage import BaseStage, Continuation, Stage, StageHandler, TerminalHandler

__all__ = [
    "BaseStage",
    "Continuation",
    "Pipeline",
    "PipelineBuilder",
    "Stage",
    "StageHandler",
    "TerminalHandler",
]
