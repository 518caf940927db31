"""Data models for insightlog."""

from .levels import LogLevel, SeverityLevel
from .records import EventRecord, ExceptionRecord, TraceRecord

__all__ = [
    "LogLevel",
    "SeverityLevel",
    "EventRecord",
    "ExceptionRecord",
    "TraceRecord",
]
