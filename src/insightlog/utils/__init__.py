"""Utility modules for insightlog."""

from .logging_context import (
    ContextualLogger,
    FeatureContext,
    get_contextual_logger,
    setup_contextual_logging,
)

__all__ = [
    "ContextualLogger",
    "FeatureContext",
    "get_contextual_logger",
    "setup_contextual_logging",
]
