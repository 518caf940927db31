"""In-process sink that keeps every record for inspection."""

import threading
from collections.abc import Mapping

from ..models.levels import SeverityLevel
from ..models.records import EventRecord, ExceptionRecord, TraceRecord
from .base import TelemetrySink

TelemetryRecord = EventRecord | TraceRecord | ExceptionRecord


class InMemorySink(TelemetrySink):
    """Collects records in arrival order."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: list[TelemetryRecord] = []

    def track_event(self, name: str, properties: Mapping[str, str]) -> None:
        self._append(EventRecord(name=name, properties=dict(properties)))

    def track_trace(self, message: str, severity: SeverityLevel) -> None:
        self._append(TraceRecord(message=message, severity=severity))

    def track_exception(
        self,
        exception: BaseException,
        severity: SeverityLevel | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        self._append(
            ExceptionRecord(
                exception=exception, severity=severity, properties=dict(properties or {})
            )
        )

    def _append(self, record: TelemetryRecord) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> list[TelemetryRecord]:
        """Snapshot of all records."""
        with self._lock:
            return list(self._records)

    def events(self, name: str | None = None) -> list[EventRecord]:
        """Get recorded events, optionally only those with the given name."""
        return [
            r
            for r in self.records
            if isinstance(r, EventRecord) and (name is None or r.name == name)
        ]

    def traces(self) -> list[TraceRecord]:
        """Get recorded traces."""
        return [r for r in self.records if isinstance(r, TraceRecord)]

    def exceptions(self) -> list[ExceptionRecord]:
        """Get recorded exceptions."""
        return [r for r in self.records if isinstance(r, ExceptionRecord)]

    def clear(self) -> None:
        """Drop all records."""
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
