# Request Pipeline Services
"""Service layer: policy loading and observation sinks.

The pipeline factory depends on the stages package, which itself depends on
the observation sink, so it is imported from its module directly::

    from request_pipeline.services.pipeline_factory import pipeline_factory
"""

from .observation_sink import (
    LoggingObservationSink,
    MemoryObservationSink,
    Observation,
    ObservationSink,
)
from .policy_service import PolicyService, policy_service

__all__ = [
    "LoggingObservationSink",
    "MemoryObservationSink",
    "Observation",
    "ObservationSink",
    "PolicyService",
    "policy_service",
]
