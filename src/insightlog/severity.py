"""Mapping from facade log levels to backend severities."""

from types import MappingProxyType

from .models.levels import LogLevel, SeverityLevel

# Every call path in the logging facade resolves severity through this table.
SEVERITY_TABLE = MappingProxyType(
    {
        LogLevel.DEBUG: SeverityLevel.VERBOSE,
        LogLevel.INFO: SeverityLevel.INFORMATION,
        LogLevel.WARN: SeverityLevel.WARNING,
        LogLevel.ERROR: SeverityLevel.ERROR,
        LogLevel.FATAL: SeverityLevel.CRITICAL,
    }
)


def map_severity(level: LogLevel) -> SeverityLevel:
    """Map a facade log level to the backend severity.

    Args:
        level: Facade log level

    Returns:
        The backend severity for the level
    """
    return SEVERITY_TABLE[LogLevel(level)]
