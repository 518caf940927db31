"""Configuration model for insightlog."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .core.exceptions import ConfigurationError
from .models.levels import LogLevel


class ExceptionTrackingPolicy(str, Enum):
    """Whether feature usage sessions forward reported exceptions."""

    FORWARD = "forward"
    DISABLED = "disabled"


class Config(BaseModel):
    """Configuration for insightlog."""

    # Telemetry Configuration
    service_name: str = Field("insightlog", description="Service name attached to telemetry")
    enable_telemetry: bool = Field(
        True, description="Forward telemetry to the backend (disabled drops every record)"
    )
    batch_export: bool = Field(
        True, description="Batch spans in the OpenTelemetry backend instead of exporting each"
    )

    # Logging Facade Configuration
    minimum_level: LogLevel = Field(
        LogLevel.DEBUG, description="Initial minimum level for loggers created by a client"
    )

    # Feature Usage Configuration
    exception_tracking: ExceptionTrackingPolicy = Field(
        ExceptionTrackingPolicy.FORWARD,
        description="Whether sessions forward exceptions reported through on_exception",
    )
    strict_sessions: bool = Field(
        False, description="Raise on double dispose instead of logging a warning"
    )
    report_unhandled_exceptions: bool = Field(
        False, description="Report exceptions escaping a session's with block before it ends"
    )

    # Logging
    log_level: str = Field("INFO", description="Logging level for insightlog diagnostics")
    log_file: Path | None = Field(None, description="Log file path")

    @field_validator("minimum_level", mode="before")
    @classmethod
    def _parse_minimum_level(cls, value):
        if isinstance(value, str):
            return LogLevel.parse(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown logging level: {value}")
        return value

    @model_validator(mode="wrap")
    @classmethod
    def _raise_configuration_error(cls, data, handler):
        try:
            return handler(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid insightlog configuration: {e}") from e

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables.

        This method will automatically load from a .env file if present, then read
        configuration from environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        import os

        from dotenv import load_dotenv

        # Load .env file if it exists (will not override existing env vars)
        load_dotenv()

        log_file = os.getenv("INSIGHTLOG_LOG_FILE")

        return cls(
            # Telemetry Configuration
            service_name=os.getenv("INSIGHTLOG_SERVICE_NAME", "insightlog"),
            enable_telemetry=os.getenv("INSIGHTLOG_ENABLE_TELEMETRY", "true").lower() == "true",
            batch_export=os.getenv("INSIGHTLOG_BATCH_EXPORT", "true").lower() == "true",
            # Logging Facade Configuration
            minimum_level=os.getenv("INSIGHTLOG_MINIMUM_LEVEL", "debug"),
            # Feature Usage Configuration
            exception_tracking=os.getenv("INSIGHTLOG_EXCEPTION_TRACKING", "forward").lower(),
            strict_sessions=os.getenv("INSIGHTLOG_STRICT_SESSIONS", "false").lower() == "true",
            report_unhandled_exceptions=os.getenv(
                "INSIGHTLOG_REPORT_UNHANDLED_EXCEPTIONS", "false"
            ).lower()
            == "true",
            # Logging
            log_level=os.getenv("INSIGHTLOG_LOG_LEVEL", "INFO"),
            log_file=Path(log_file) if log_file else None,
        )
