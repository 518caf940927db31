"""Telemetry record models captured by in-process sinks."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from .levels import SeverityLevel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventRecord(BaseModel):
    """A named event with string properties."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Event name")
    properties: dict[str, str] = Field(default_factory=dict, description="Event properties")
    timestamp: datetime = Field(default_factory=_utcnow, description="Time the event was recorded")


class TraceRecord(BaseModel):
    """A formatted log line with its backend severity."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(..., description="Formatted message")
    severity: SeverityLevel = Field(..., description="Backend severity")
    timestamp: datetime = Field(default_factory=_utcnow, description="Time the trace was recorded")


class ExceptionRecord(BaseModel):
    """An exception with optional severity and string properties."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    exception: BaseException = Field(..., description="The reported exception")
    severity: SeverityLevel | None = Field(None, description="Backend severity, if known")
    properties: dict[str, str] = Field(default_factory=dict, description="Exception properties")
    timestamp: datetime = Field(
        default_factory=_utcnow, description="Time the exception was recorded"
    )

    @property
    def exception_type(self) -> str:
        """Qualified name of the exception class."""
        exc_type = type(self.exception)
        return f"{exc_type.__module__}.{exc_type.__qualname__}"
