"""Tests for feature usage tracking sessions."""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from insightlog.config import ExceptionTrackingPolicy
from insightlog.core.exceptions import SessionMisuseError, SinkDeliveryError
from insightlog.feature_usage import FeatureUsageSession
from insightlog.utils.logging_context import current_feature, current_reference

START = "Feature Usage Start"
END = "Feature Usage End"


class TestStart:
    """Test the start event."""

    def test_root_session_start_event(self, memory_sink):
        """A root session emits one start event without a parent."""
        session = FeatureUsageSession("X", memory_sink)

        (event,) = memory_sink.events()
        assert event.name == START
        assert event.properties == {"Name": "X", "Reference": str(session.reference)}
        assert "ParentReference" not in event.properties

    def test_reference_is_fresh_and_not_nil(self, memory_sink):
        session = FeatureUsageSession("X", memory_sink)

        assert isinstance(session.reference, uuid.UUID)
        assert session.reference.int != 0
        assert session.parent_reference is None

    def test_child_session_start_event(self, memory_sink, parent_reference):
        session = FeatureUsageSession("Y", memory_sink, parent_reference=parent_reference)

        (event,) = memory_sink.events(START)
        assert event.properties["ParentReference"] == str(parent_reference)
        assert session.parent_reference == parent_reference

    def test_nil_parent_means_root(self, memory_sink):
        """The nil UUID is the no-parent sentinel."""
        session = FeatureUsageSession("X", memory_sink, parent_reference=uuid.UUID(int=0))

        assert session.parent_reference is None
        assert "ParentReference" not in memory_sink.events()[0].properties

    def test_start_failure_propagates(self, mock_sink):
        mock_sink.track_event.side_effect = SinkDeliveryError("rejected")

        with pytest.raises(SinkDeliveryError):
            FeatureUsageSession("X", mock_sink)


class TestSubFeature:
    """Test flat parent correlation."""

    def test_sub_feature_of_root_has_no_parent(self, memory_sink):
        """Children of a root forward the root's (empty) parent reference."""
        root = FeatureUsageSession("X", memory_sink)
        child = root.sub_feature("Y")

        child_start = memory_sink.events(START)[1]
        assert child_start.properties["Name"] == "Y"
        assert "ParentReference" not in child_start.properties
        assert child.parent_reference is None
        assert child.reference != root.reference

    def test_sub_feature_forwards_original_parent(self, memory_sink, parent_reference):
        """A child's own sub-feature correlates to R, not to the child."""
        child = FeatureUsageSession("Y", memory_sink, parent_reference=parent_reference)
        grandchild = child.sub_feature("Z")

        grandchild_start = memory_sink.events(START)[1]
        assert grandchild_start.properties["ParentReference"] == str(parent_reference)
        assert grandchild_start.properties["ParentReference"] != str(child.reference)
        assert grandchild.parent_reference == parent_reference

    def test_deep_nesting_stays_flat(self, memory_sink, parent_reference):
        session = FeatureUsageSession("level0", memory_sink, parent_reference=parent_reference)
        for depth in range(1, 5):
            session = session.sub_feature(f"level{depth}")

        parents = {e.properties["ParentReference"] for e in memory_sink.events(START)}
        assert parents == {str(parent_reference)}

    def test_child_does_not_end_parent(self, memory_sink):
        root = FeatureUsageSession("X", memory_sink)
        child = root.sub_feature("Y")

        child.dispose()

        (end,) = memory_sink.events(END)
        assert end.properties["Reference"] == str(child.reference)
        assert not root.disposed

    def test_sub_feature_inherits_policies(self, memory_sink):
        root = FeatureUsageSession(
            "X", memory_sink, exception_tracking=ExceptionTrackingPolicy.DISABLED, strict=True
        )
        child = root.sub_feature("Y")

        child.on_exception(RuntimeError())
        child.dispose()

        assert memory_sink.exceptions() == []
        with pytest.raises(SessionMisuseError):
            child.dispose()


class TestDispose:
    """Test the end event."""

    def test_end_event_matches_start(self, memory_sink):
        session = FeatureUsageSession("X", memory_sink)
        session.dispose()

        start, end = memory_sink.events()
        assert (start.name, end.name) == (START, END)
        assert end.properties == start.properties
        assert session.disposed

    def test_double_dispose_warns(self, memory_sink, caplog):
        """A repeated dispose is ignored with a warning."""
        session = FeatureUsageSession("X", memory_sink)
        session.dispose()

        with caplog.at_level(logging.WARNING, logger="insightlog.feature_usage"):
            session.dispose()

        assert len(memory_sink.events(END)) == 1
        assert "repeated dispose" in caplog.text

    def test_double_dispose_strict(self, memory_sink):
        session = FeatureUsageSession("X", memory_sink, strict=True)
        session.dispose()

        with pytest.raises(SessionMisuseError, match="already disposed"):
            session.dispose()
        assert len(memory_sink.events(END)) == 1

    def test_close_alias(self, memory_sink):
        FeatureUsageSession("X", memory_sink).close()
        assert len(memory_sink.events(END)) == 1


class TestContextManager:
    """Test scoped use."""

    def test_with_block(self, memory_sink):
        with FeatureUsageSession("X", memory_sink) as session:
            assert memory_sink.events(END) == []

        assert session.disposed
        assert [e.name for e in memory_sink.events()] == [START, END]

    def test_end_fires_on_error_path(self, memory_sink):
        """The end event is emitted when the block raises."""
        with pytest.raises(ValueError):
            with FeatureUsageSession("X", memory_sink):
                raise ValueError("broken")

        assert len(memory_sink.events(END)) == 1
        assert memory_sink.exceptions() == []

    def test_reports_unhandled_exception_when_enabled(self, memory_sink):
        """The escaping exception is reported before the end event."""
        error = ValueError("broken")

        with pytest.raises(ValueError):
            with FeatureUsageSession("X", memory_sink, report_unhandled_exceptions=True):
                raise error

        kinds = [type(r).__name__ for r in memory_sink.records]
        assert kinds == ["EventRecord", "ExceptionRecord", "EventRecord"]
        assert memory_sink.exceptions()[0].exception is error

    def test_event_order_with_nested_features(self, memory_sink):
        with FeatureUsageSession("outer", memory_sink) as outer:
            with outer.sub_feature("inner"):
                pass

        sequence = [(e.name, e.properties["Name"]) for e in memory_sink.events()]
        assert sequence == [
            (START, "outer"),
            (START, "inner"),
            (END, "inner"),
            (END, "outer"),
        ]

    def test_sets_logging_context(self, memory_sink):
        """The active feature is visible to contextual logging."""
        with FeatureUsageSession("outer", memory_sink) as outer:
            assert current_feature.get() == "outer"
            with outer.sub_feature("inner") as inner:
                assert current_feature.get() == "inner"
                assert current_reference.get() == str(inner.reference)
            assert current_feature.get() == "outer"

        assert current_feature.get() is None
        assert current_reference.get() is None


class TestOnException:
    """Test exception reporting."""

    def test_exception_record(self, memory_sink, parent_reference):
        session = FeatureUsageSession("X", memory_sink, parent_reference=parent_reference)
        error = ConnectionError("unreachable")

        session.on_exception(error)

        (record,) = memory_sink.exceptions()
        assert record.exception is error
        assert record.severity is None
        assert record.properties == {
            "Name": "X",
            "Reference": str(session.reference),
            "ParentReference": str(parent_reference),
        }

    def test_disabled_policy_is_noop(self, mock_sink):
        session = FeatureUsageSession(
            "X", mock_sink, exception_tracking=ExceptionTrackingPolicy.DISABLED
        )

        session.on_exception(RuntimeError())

        mock_sink.track_exception.assert_not_called()

    def test_policy_accepts_value(self, memory_sink):
        session = FeatureUsageSession("X", memory_sink, exception_tracking="disabled")
        session.on_exception(RuntimeError())
        assert memory_sink.exceptions() == []

    def test_sink_failure_propagates(self, mock_sink):
        mock_sink.track_exception.side_effect = SinkDeliveryError("rejected")
        session = FeatureUsageSession("X", mock_sink)

        with pytest.raises(SinkDeliveryError):
            session.on_exception(RuntimeError())


class TestUniqueness:
    """Test reference uniqueness."""

    def test_ten_thousand_sessions(self, memory_sink):
        references = {FeatureUsageSession("X", memory_sink).reference for _ in range(10_000)}
        assert len(references) == 10_000

    def test_concurrent_sessions(self, memory_sink):
        """Sessions created on many threads never collide."""

        def create(_):
            with FeatureUsageSession("X", memory_sink) as session:
                return session.reference

        with ThreadPoolExecutor(max_workers=8) as pool:
            references = list(pool.map(create, range(2_000)))

        assert len(set(references)) == 2_000
        assert len(memory_sink.events(START)) == 2_000
        assert len(memory_sink.events(END)) == 2_000

    def test_repr(self, memory_sink):
        session = FeatureUsageSession("X", memory_sink)
        assert repr(session).startswith("FeatureUsageSession(name='X'")
