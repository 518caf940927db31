"""Custom exceptions for insightlog."""


class InsightLogError(Exception):
    """Base exception for all insightlog errors."""

    pass


class FormatError(InsightLogError):
    """Raised when a message template cannot be filled with the supplied arguments."""

    def __init__(self, message: str, template: str | None = None, arg_count: int | None = None):
        super().__init__(message)
        self.template = template
        self.arg_count = arg_count


class SinkDeliveryError(InsightLogError):
    """Raised when a telemetry backend fails to accept a record."""

    pass


class SessionMisuseError(InsightLogError):
    """Raised when a feature usage session is used outside its lifetime."""

    pass


class ConfigurationError(InsightLogError):
    """Raised when configuration is invalid."""

    pass
