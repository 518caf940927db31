"""Leveled logging facade that forwards to a telemetry sink."""

from typing import Any

from .core.constants import PROPERTY_KEYS
from .formatting import FormatProvider, format_message
from .models.levels import LogLevel
from .severity import map_severity
from .sinks.base import TelemetrySink


def source_label(source: str | type) -> str:
    """Derive the source label for a logger.

    Classes are labelled with their module-qualified name.
    """
    if isinstance(source, type):
        return f"{source.__module__}.{source.__qualname__}"
    return str(source)


class TelemetryLogger:
    """Logging facade for one source.

    Every method formats its message first, then checks the minimum level,
    then sends exactly one record to the sink. Formatting happens even for
    suppressed calls so a broken template is reported regardless of level.

    Example:
        logger = TelemetryLogger("billing.invoices", sink)
        logger.info("Issued invoice {0} for {1:.2f}", invoice_id, total)
        logger.error_exception("Payment capture failed", exc)
    """

    def __init__(
        self, source: str | type, sink: TelemetrySink, level: LogLevel = LogLevel.DEBUG
    ):
        """Initialize the logger.

        Args:
            source: Source label or the class doing the logging
            sink: Telemetry backend
            level: Minimum level; calls below it are dropped
        """
        self._source = source_label(source)
        self._sink = sink
        self.level = LogLevel(level)

    @property
    def source(self) -> str:
        """Label identifying where log calls come from."""
        return self._source

    def is_enabled(self, level: LogLevel) -> bool:
        """Check whether calls at ``level`` reach the sink."""
        return level >= self.level

    def write(self, message: str, level: LogLevel) -> None:
        """Write a preformatted message at the given level."""
        self.log(level, message)

    def log(
        self, level: LogLevel, message: Any, *args: Any, provider: FormatProvider | None = None
    ) -> None:
        """Format a message and send it as a trace.

        Args:
            level: Facade log level
            message: Message template, or any value to log as text
            *args: Positional arguments for the template
            provider: Optional format provider for the substituted values

        Raises:
            FormatError: If the template does not match the arguments
            SinkDeliveryError: If the backend rejects the trace
        """
        text = format_message(message, *args, provider=provider)
        if not self.is_enabled(level):
            return
        self._sink.track_trace(text, map_severity(level))

    def log_exception(
        self,
        level: LogLevel,
        message: Any,
        exception: BaseException,
        *args: Any,
        provider: FormatProvider | None = None,
    ) -> None:
        """Format a message and send it with an exception.

        The message travels as the ``message`` property of the exception
        record, next to the logger's ``source``.

        Raises:
            FormatError: If the template does not match the arguments
            SinkDeliveryError: If the backend rejects the record
        """
        text = format_message(message, *args, provider=provider)
        if not self.is_enabled(level):
            return
        properties = {PROPERTY_KEYS.MESSAGE: text, PROPERTY_KEYS.SOURCE: self._source}
        self._sink.track_exception(exception, map_severity(level), properties)

    def debug(self, message: Any, *args: Any, provider: FormatProvider | None = None) -> None:
        self.log(LogLevel.DEBUG, message, *args, provider=provider)

    def info(self, message: Any, *args: Any, provider: FormatProvider | None = None) -> None:
        self.log(LogLevel.INFO, message, *args, provider=provider)

    def warn(self, message: Any, *args: Any, provider: FormatProvider | None = None) -> None:
        self.log(LogLevel.WARN, message, *args, provider=provider)

    def error(self, message: Any, *args: Any, provider: FormatProvider | None = None) -> None:
        self.log(LogLevel.ERROR, message, *args, provider=provider)

    def fatal(self, message: Any, *args: Any, provider: FormatProvider | None = None) -> None:
        self.log(LogLevel.FATAL, message, *args, provider=provider)

    def debug_exception(
        self,
        message: Any,
        exception: BaseException,
        *args: Any,
        provider: FormatProvider | None = None,
    ) -> None:
        self.log_exception(LogLevel.DEBUG, message, exception, *args, provider=provider)

    def info_exception(
        self,
        message: Any,
        exception: BaseException,
        *args: Any,
        provider: FormatProvider | None = None,
    ) -> None:
        self.log_exception(LogLevel.INFO, message, exception, *args, provider=provider)

    def warn_exception(
        self,
        message: Any,
        exception: BaseException,
        *args: Any,
        provider: FormatProvider | None = None,
    ) -> None:
        self.log_exception(LogLevel.WARN, message, exception, *args, provider=provider)

    def error_exception(
        self,
        message: Any,
        exception: BaseException,
        *args: Any,
        provider: FormatProvider | None = None,
    ) -> None:
        self.log_exception(LogLevel.ERROR, message, exception, *args, provider=provider)

    def fatal_exception(
        self,
        message: Any,
        exception: BaseException,
        *args: Any,
        provider: FormatProvider | None = None,
    ) -> None:
        self.log_exception(LogLevel.FATAL, message, exception, *args, provider=provider)

    def __repr__(self) -> str:
        return f"TelemetryLogger(source={self._source!r}, level={self.level.name})"
