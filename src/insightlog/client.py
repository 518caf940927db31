"""Client wiring a sink and configuration into loggers and feature sessions."""

import logging

from .config import Config
from .feature_usage import FeatureUsageSession
from .logger import TelemetryLogger
from .models.levels import LogLevel
from .sinks.base import NullSink, TelemetrySink
from .sinks.otel import OpenTelemetrySink

logger = logging.getLogger(__name__)

_STDLIB_LEVELS = (
    (logging.CRITICAL, LogLevel.FATAL),
    (logging.ERROR, LogLevel.ERROR),
    (logging.WARNING, LogLevel.WARN),
    (logging.INFO, LogLevel.INFO),
)

# Records from these loggers are produced while delivering telemetry
_INTERNAL_LOGGERS = ("opentelemetry", "insightlog")


def level_from_stdlib(levelno: int) -> LogLevel:
    """Map a standard library logging level number to a facade level."""
    for threshold, level in _STDLIB_LEVELS:
        if levelno >= threshold:
            return level
    return LogLevel.DEBUG


class TelemetryClient:
    """Factory for loggers and feature usage sessions sharing one backend."""

    def __init__(self, sink: TelemetrySink | None = None, config: Config | None = None):
        """Initialize the client.

        Args:
            sink: Telemetry backend; an OpenTelemetry sink built from ``config``
                when omitted
            config: insightlog configuration (defaults apply when omitted)
        """
        self.config = config or Config()

        if not self.config.enable_telemetry:
            sink = NullSink()
            logger.info("Telemetry disabled, records will be dropped")
        elif sink is None:
            sink = OpenTelemetrySink.from_config(self.config)

        self.sink = sink

    @classmethod
    def from_env(cls, sink: TelemetrySink | None = None) -> "TelemetryClient":
        """Create a client configured from environment variables."""
        return cls(sink=sink, config=Config.from_env())

    def get_logger(self, source: str | type) -> TelemetryLogger:
        """Create a logger for ``source`` starting at the configured minimum level."""
        return TelemetryLogger(source, self.sink, level=self.config.minimum_level)

    def track_feature(self, name: str) -> FeatureUsageSession:
        """Start a root feature usage session."""
        return FeatureUsageSession(
            name,
            self.sink,
            exception_tracking=self.config.exception_tracking,
            strict=self.config.strict_sessions,
            report_unhandled_exceptions=self.config.report_unhandled_exceptions,
        )

    def log_handler(self, source: str | type = "logging") -> "TelemetryLogHandler":
        """Create a standard library logging handler that forwards to this client."""
        return TelemetryLogHandler(self.get_logger(source))

    def flush(self) -> None:
        """Push records held by the sink."""
        self.sink.flush()


def _is_internal(name: str) -> bool:
    return any(name == prefix or name.startswith(prefix + ".") for prefix in _INTERNAL_LOGGERS)


class TelemetryLogHandler(logging.Handler):
    """Handler that forwards standard library log records to a telemetry logger.

    Records carrying ``exc_info`` are sent as exception records; all others
    as traces. The record's message is already formatted by the logging
    module, so it reaches the telemetry logger without further substitution.

    Records from the ``opentelemetry`` and ``insightlog`` logger trees are
    skipped so that diagnostics emitted while delivering a record never loop
    back into the sink.

    Usage:
        handler = client.log_handler("myapp")
        logging.getLogger("myapp").addHandler(handler)
    """

    def __init__(self, telemetry_logger: TelemetryLogger, level: int = logging.NOTSET):
        super().__init__(level)
        self.telemetry_logger = telemetry_logger

    def emit(self, record: logging.LogRecord) -> None:
        if _is_internal(record.name):
            return
        try:
            message = record.getMessage()
            level = level_from_stdlib(record.levelno)
            exc = record.exc_info[1] if record.exc_info else None
            if exc is not None:
                self.telemetry_logger.log_exception(level, message, exc)
            else:
                self.telemetry_logger.log(level, message)
        except Exception:
            self.handleError(record)


# Global client instance
_client: TelemetryClient | None = None


def use_telemetry(client: TelemetryClient | None = None) -> TelemetryClient:
    """Install the process-wide default client.

    Loggers and sessions constructed directly never consult it; it only backs
    the module-level ``get_logger`` and ``track_feature`` helpers.

    Args:
        client: Client to install; one configured from the environment when
            omitted

    Returns:
        The installed client
    """
    global _client
    _client = client or TelemetryClient.from_env()
    return _client


def get_client() -> TelemetryClient:
    """Get the process-wide client, installing one from the environment if needed."""
    global _client
    if _client is None:
        _client = TelemetryClient.from_env()
    return _client


def get_logger(source: str | type) -> TelemetryLogger:
    """Create a logger from the process-wide client."""
    return get_client().get_logger(source)


def track_feature(name: str) -> FeatureUsageSession:
    """Start a root feature usage session on the process-wide client."""
    return get_client().track_feature(name)
