# Test Configuration
"""Pytest fixtures for request pipeline tests."""

import os
from pathlib import Path

# Point settings at the repo policy before importing service modules
_REPO_ROOT = Path(__file__).resolve().parents[1]
os.environ.setdefault("PIPELINE_POLICY_FILE", str(_REPO_ROOT / "policy.yaml"))
os.environ.setdefault("PIPELINE_ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from request_pipeline.models.exchange import Exchange  # noqa: E402
from request_pipeline.services.observation_sink import MemoryObservationSink  # noqa: E402


class StageRecorder:
    """Builds stages that record pre/post events and count invocations."""

    def __init__(self):
        self.events = []
        self.counts = {}

    def _count(self, name):
        self.counts[name] = self.counts.get(name, 0) + 1

    def passthrough(self, name):
        async def stage(exchange, call_next):
            self._count(name)
            self.events.append(f"{name}:before")
            await call_next()
            self.events.append(f"{name}:after")
        stage.__name__ = name
        return stage

    def short_circuit(self, name, status_code=403, message="Forbidden"):
        async def stage(exchange, call_next):
            self._count(name)
            self.events.append(f"{name}:reject")
            exchange.reject(status_code, message)
        stage.__name__ = name
        return stage

    def terminal(self, body="OK"):
        async def terminal(exchange):
            self._count("terminal")
            self.events.append("terminal")
            exchange.write(body, status_code=200)
            exchange.complete()
        return terminal


@pytest.fixture
def recorder():
    return StageRecorder()


@pytest.fixture
def memory_sink():
    return MemoryObservationSink()


@pytest.fixture
def make_exchange():
    """Factory for exchanges with sensible defaults."""
    def _make(path="/", query=None, remote_address="127.0.0.1", **kwargs):
        return Exchange(path=path, query=dict(query or {}), remote_address=remote_address, **kwargs)
    return _make


@pytest.fixture
def client():
    """Test client for the FastAPI host (runs the lifespan)."""
    from request_pipeline.main import app

    with TestClient(app) as test_client:
        yield test_client
