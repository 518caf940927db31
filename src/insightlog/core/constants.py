"""Centralized constants for insightlog.

Event names and property keys are part of the wire contract with the
telemetry backend; dashboards and queries depend on them verbatim.
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class EventNames:
    """Names of the lifecycle events emitted by feature usage sessions."""

    FEATURE_START: Final[str] = "Feature Usage Start"
    FEATURE_END: Final[str] = "Feature Usage End"


@dataclass(frozen=True)
class PropertyKeys:
    """Property keys attached to telemetry records."""

    # Feature usage correlation
    NAME: Final[str] = "Name"
    REFERENCE: Final[str] = "Reference"
    PARENT_REFERENCE: Final[str] = "ParentReference"

    # Exception records from the log facade
    MESSAGE: Final[str] = "message"
    SOURCE: Final[str] = "source"


@dataclass(frozen=True)
class OpenTelemetryAttributes:
    """Span names and attribute keys used by the OpenTelemetry backend."""

    TRACE_SPAN: Final[str] = "trace"
    EXCEPTION_SPAN: Final[str] = "exception"
    MESSAGE: Final[str] = "insightlog.message"
    SEVERITY: Final[str] = "insightlog.severity"
    SEVERITY_NUMBER: Final[str] = "insightlog.severity_number"
    PROPERTY_PREFIX: Final[str] = "property."


EVENT_NAMES: Final = EventNames()
PROPERTY_KEYS: Final = PropertyKeys()
OTEL_ATTRIBUTES: Final = OpenTelemetryAttributes()
