"""Telemetry backend abstraction."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from ..models.levels import SeverityLevel


class TelemetrySink(ABC):
    """Abstract base class for telemetry backends.

    Implementations must be safe to call from several threads at once and
    raise ``SinkDeliveryError`` when a record cannot be accepted.
    """

    @abstractmethod
    def track_event(self, name: str, properties: Mapping[str, str]) -> None:
        """Record a named event.

        Args:
            name: Event name
            properties: String properties attached to the event
        """
        pass

    @abstractmethod
    def track_trace(self, message: str, severity: SeverityLevel) -> None:
        """Record a log line.

        Args:
            message: Formatted message
            severity: Backend severity
        """
        pass

    @abstractmethod
    def track_exception(
        self,
        exception: BaseException,
        severity: SeverityLevel | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        """Record an exception.

        Args:
            exception: The exception to report
            severity: Backend severity, if known
            properties: String properties attached to the record
        """
        pass

    def flush(self) -> None:
        """Push any records the backend is holding."""
        pass


class NullSink(TelemetrySink):
    """Sink that drops every record."""

    def track_event(self, name: str, properties: Mapping[str, str]) -> None:
        pass

    def track_trace(self, message: str, severity: SeverityLevel) -> None:
        pass

    def track_exception(
        self,
        exception: BaseException,
        severity: SeverityLevel | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> None:
        pass
