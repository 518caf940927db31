"""Pytest configuration and shared fixtures."""

import uuid
from unittest.mock import MagicMock

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from insightlog.config import Config
from insightlog.sinks.base import TelemetrySink
from insightlog.sinks.memory import InMemorySink
from insightlog.sinks.otel import OpenTelemetrySink


@pytest.fixture
def memory_sink() -> InMemorySink:
    """Sink that keeps every record."""
    return InMemorySink()


@pytest.fixture
def mock_sink() -> MagicMock:
    """Mock sink for asserting exact backend calls."""
    return MagicMock(spec=TelemetrySink)


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """OpenTelemetry exporter that keeps finished spans in memory."""
    return InMemorySpanExporter()


@pytest.fixture
def otel_sink(span_exporter: InMemorySpanExporter) -> OpenTelemetrySink:
    """OpenTelemetry sink exporting each span as soon as it ends."""
    sink = OpenTelemetrySink(service_name="insightlog-tests", exporter=span_exporter, batch=False)
    yield sink
    sink.shutdown()


@pytest.fixture
def test_config() -> Config:
    """Configuration used by client tests."""
    return Config(service_name="insightlog-tests", batch_export=False)


@pytest.fixture
def parent_reference() -> uuid.UUID:
    """Reference of an ancestor session created elsewhere."""
    return uuid.UUID("6f1c1a52-2d5e-4c4e-9a57-3f5d2b8e0c11")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep INSIGHTLOG_* variables from the host out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("INSIGHTLOG_"):
            monkeypatch.delenv(key)
