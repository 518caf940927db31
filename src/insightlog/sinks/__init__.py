"""Telemetry backends."""

from .base import NullSink, TelemetrySink
from .memory import InMemorySink
from .otel import OpenTelemetrySink

__all__ = ["TelemetrySink", "NullSink", "InMemorySink", "OpenTelemetrySink"]
