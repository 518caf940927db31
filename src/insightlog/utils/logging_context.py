"""Context-aware logging utilities for insightlog."""

import contextvars
import logging
from collections.abc import Mapping
from typing import Any

# Innermost feature usage session entered on this thread or task
current_feature = contextvars.ContextVar[str | None]("current_feature", default=None)
current_reference = contextvars.ContextVar[str | None]("current_reference", default=None)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that automatically includes the active feature."""

    def process(self, msg: str, kwargs: Mapping[str, Any]) -> tuple[str, Mapping[str, Any]]:
        """Add feature information to log records."""
        feature = current_feature.get()
        reference = current_reference.get()

        extra = dict(kwargs.get("extra") or {})
        if feature:
            extra["feature"] = feature
        if reference:
            extra["reference"] = reference

        kwargs["extra"] = extra

        context_parts = []
        if feature:
            context_parts.append(f"feature={feature}")
        if reference:
            context_parts.append(f"ref={reference}")

        if context_parts:
            msg = f"[{', '.join(context_parts)}] {msg}"

        return msg, kwargs


def get_contextual_logger(name: str) -> ContextualLogger:
    """Get a logger that automatically includes the active feature.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextualLogger instance
    """
    base_logger = logging.getLogger(name)
    return ContextualLogger(base_logger, {})


class FeatureContext:
    """Context manager marking a feature usage session as active."""

    def __init__(self, name: str, reference: str):
        self.name = name
        self.reference = reference
        self._tokens = None

    def __enter__(self):
        self._tokens = (current_feature.set(self.name), current_reference.set(self.reference))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._tokens:
            feature_token, reference_token = self._tokens
            current_feature.reset(feature_token)
            current_reference.reset(reference_token)
            self._tokens = None


def setup_contextual_logging(config=None):
    """Set up insightlog diagnostic logging with a feature-aware format.

    This should be called once at application startup.

    Args:
        config: Optional insightlog ``Config`` supplying level and log file
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(feature)s %(reference)s",
        defaults={"feature": "", "reference": ""},
    )

    package_logger = logging.getLogger("insightlog")
    if config is not None:
        package_logger.setLevel(config.log_level)
        if config.log_file is not None:
            file_handler = logging.FileHandler(config.log_file)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

    # Apply to root logger handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)
