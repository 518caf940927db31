"""Core constants and exceptions."""

from .constants import EVENT_NAMES, PROPERTY_KEYS
from .exceptions import (
    ConfigurationError,
    FormatError,
    InsightLogError,
    SessionMisuseError,
    SinkDeliveryError,
)

__all__ = [
    "EVENT_NAMES",
    "PROPERTY_KEYS",
    "ConfigurationError",
    "FormatError",
    "InsightLogError",
    "SessionMisuseError",
    "SinkDeliveryError",
]
