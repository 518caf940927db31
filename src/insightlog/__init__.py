"""insightlog - Leveled logging and feature usage tracking over a telemetry backend."""

__version__ = "0.1.0"

from insightlog.client import (
    TelemetryClient,
    TelemetryLogHandler,
    get_client,
    get_logger,
    track_feature,
    use_telemetry,
)
from insightlog.config import Config, ExceptionTrackingPolicy
from insightlog.core.exceptions import (
    ConfigurationError,
    FormatError,
    InsightLogError,
    SessionMisuseError,
    SinkDeliveryError,
)
from insightlog.feature_usage import FeatureUsageSession
from insightlog.formatting import INVARIANT_CULTURE, Culture, format_message
from insightlog.logger import TelemetryLogger
from insightlog.models import LogLevel, SeverityLevel
from insightlog.severity import map_severity
from insightlog.sinks import InMemorySink, NullSink, OpenTelemetrySink, TelemetrySink

__all__ = [
    "TelemetryClient",
    "TelemetryLogHandler",
    "get_client",
    "get_logger",
    "track_feature",
    "use_telemetry",
    "Config",
    "ExceptionTrackingPolicy",
    "ConfigurationError",
    "FormatError",
    "InsightLogError",
    "SessionMisuseError",
    "SinkDeliveryError",
    "FeatureUsageSession",
    "INVARIANT_CULTURE",
    "Culture",
    "format_message",
    "TelemetryLogger",
    "LogLevel",
    "SeverityLevel",
    "map_severity",
    "InMemorySink",
    "NullSink",
    "OpenTelemetrySink",
    "TelemetrySink",
]
