"""Feature usage tracking sessions."""

import uuid

from .config import ExceptionTrackingPolicy
from .core.constants import EVENT_NAMES, PROPERTY_KEYS
from .core.exceptions import SessionMisuseError
from .sinks.base import TelemetrySink
from .utils.logging_context import FeatureContext, get_contextual_logger

logger = get_contextual_logger(__name__)


class FeatureUsageSession:
    """One tracked invocation of a named feature.

    Creating a session emits a ``Feature Usage Start`` event and disposing it
    emits ``Feature Usage End``. Both events, and any exception reported
    through the session, carry the session's ``Name`` and ``Reference`` plus
    ``ParentReference`` when the session has a parent.

    Sub-features forward this session's *parent* reference rather than its
    own, so every descendant of a root correlates to the same top-level
    parent no matter how deeply the code nests them.

    Use the session as a context manager so the end event fires on every
    exit path:

        with FeatureUsageSession("Export report", sink) as session:
            with session.sub_feature("Render PDF"):
                render()
    """

    def __init__(
        self,
        name: str,
        sink: TelemetrySink,
        parent_reference: uuid.UUID | None = None,
        exception_tracking: ExceptionTrackingPolicy = ExceptionTrackingPolicy.FORWARD,
        strict: bool = False,
        report_unhandled_exceptions: bool = False,
    ):
        """Start tracking a feature.

        Args:
            name: Human-readable feature label
            sink: Telemetry backend
            parent_reference: Reference of the parent session; ``None`` or the
                nil UUID for a root session
            exception_tracking: Whether ``on_exception`` forwards to the sink
            strict: Raise ``SessionMisuseError`` on double dispose instead of
                logging a warning
            report_unhandled_exceptions: Report an exception escaping the
                ``with`` block before the end event

        Raises:
            SinkDeliveryError: If the backend rejects the start event
        """
        if parent_reference is not None and parent_reference.int == 0:
            parent_reference = None

        self._name = name
        self._reference = uuid.uuid4()
        self._parent_reference = parent_reference
        self._sink = sink
        self._exception_tracking = ExceptionTrackingPolicy(exception_tracking)
        self._strict = strict
        self._report_unhandled_exceptions = report_unhandled_exceptions
        self._disposed = False
        self._context: FeatureContext | None = None

        self._track_event(EVENT_NAMES.FEATURE_START)

    @property
    def name(self) -> str:
        """Feature label."""
        return self._name

    @property
    def reference(self) -> uuid.UUID:
        """Unique reference of this session."""
        return self._reference

    @property
    def parent_reference(self) -> uuid.UUID | None:
        """Reference of the parent session, or ``None`` for a root."""
        return self._parent_reference

    @property
    def disposed(self) -> bool:
        """Whether the end event has been emitted."""
        return self._disposed

    @property
    def properties(self) -> dict[str, str]:
        """Correlation properties attached to every record of this session."""
        properties = {
            PROPERTY_KEYS.NAME: self._name,
            PROPERTY_KEYS.REFERENCE: str(self._reference),
        }
        if self._parent_reference is not None:
            properties[PROPERTY_KEYS.PARENT_REFERENCE] = str(self._parent_reference)
        return properties

    def sub_feature(self, name: str) -> "FeatureUsageSession":
        """Start a child session correlated to this session's parent.

        The child is independent: disposing it does not end this session.
        """
        return FeatureUsageSession(
            name,
            self._sink,
            parent_reference=self._parent_reference,
            exception_tracking=self._exception_tracking,
            strict=self._strict,
            report_unhandled_exceptions=self._report_unhandled_exceptions,
        )

    def on_exception(self, exception: BaseException) -> None:
        """Report an exception that occurred while the feature was in use.

        Does nothing when exception tracking is disabled.

        Raises:
            SinkDeliveryError: If the backend rejects the record
        """
        if self._exception_tracking is ExceptionTrackingPolicy.DISABLED:
            return
        self._sink.track_exception(exception, None, self.properties)

    def dispose(self) -> None:
        """Emit the end event.

        A second call is a caller error: it is ignored with a warning, or
        raises ``SessionMisuseError`` when the session is strict.
        """
        if self._disposed:
            if self._strict:
                raise SessionMisuseError(
                    f"Feature usage session {self._name!r} ({self._reference}) already disposed"
                )
            logger.warning(
                f"Ignoring repeated dispose of feature usage session "
                f"{self._name!r} ({self._reference})"
            )
            return

        self._disposed = True
        self._track_event(EVENT_NAMES.FEATURE_END)

    def close(self) -> None:
        """Alias of ``dispose`` for ``contextlib.closing``."""
        self.dispose()

    def _track_event(self, event_name: str) -> None:
        self._sink.track_event(event_name, self.properties)

    def __enter__(self) -> "FeatureUsageSession":
        self._context = FeatureContext(self._name, str(self._reference))
        self._context.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_val is not None and self._report_unhandled_exceptions:
                self.on_exception(exc_val)
        finally:
            try:
                self.dispose()
            finally:
                if self._context is not None:
                    self._context.__exit__(exc_type, exc_val, exc_tb)
                    self._context = None

    def __repr__(self) -> str:
        return (
            f"FeatureUsageSession(name={self._name!r}, reference={self._reference}, "
            f"parent_reference={self._parent_reference})"
        )
