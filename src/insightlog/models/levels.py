"""Log level and backend severity enumerations."""

from enum import IntEnum


class LogLevel(IntEnum):
    """Ordered log importance levels exposed by the logging facade."""

    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5

    @classmethod
    def parse(cls, value: "str | int | LogLevel") -> "LogLevel":
        """Resolve a level from its name, numeric value or an existing member.

        Names are case-insensitive and accept the common aliases
        ``warning`` and ``critical``.

        Raises:
            ValueError: If the value does not name a level
        """
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)

        key = value.strip().upper()
        key = _LEVEL_ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None


_LEVEL_ALIASES = {"WARNING": "WARN", "CRITICAL": "FATAL", "INFORMATION": "INFO"}


class SeverityLevel(IntEnum):
    """Severity values understood by the telemetry backend."""

    VERBOSE = 0
    INFORMATION = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4
