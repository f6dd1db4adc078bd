"""Unit tests for subscriber fan-out."""

from unittest.mock import Mock

import pytest

from perf_telemetry.core.subscriptions import SubscriptionBus


class TestSubscriptionBus:
    """Test suite for SubscriptionBus class."""

    @pytest.fixture
    def bus(self):
        return SubscriptionBus()

    @pytest.fixture
    def metric(self, make_metric):
        return make_metric("fps", 58)

    @pytest.mark.unit
    def test_publish_reaches_all_subscribers(self, bus, metric):
        """Test that every registered observer is notified."""
        first, second = Mock(), Mock()
        bus.subscribe(first)
        bus.subscribe(second)

        failures = bus.publish(metric)

        assert failures == 0
        first.assert_called_once_with(metric)
        second.assert_called_once_with(metric)

    @pytest.mark.unit
    def test_notification_follows_registration_order(self, bus, metric):
        """Test that observers are called in the order they subscribed."""
        calls = []
        bus.subscribe(lambda m: calls.append("first"))
        bus.subscribe(lambda m: calls.append("second"))
        bus.subscribe(lambda m: calls.append("third"))

        bus.publish(metric)

        assert calls == ["first", "second", "third"]

    @pytest.mark.unit
    def test_unsubscribe_removes_observer(self, bus, metric):
        """Test that the returned function detaches the observer."""
        callback = Mock()
        unsubscribe = bus.subscribe(callback)

        unsubscribe()
        bus.publish(metric)

        callback.assert_not_called()
        assert len(bus) == 0

    @pytest.mark.unit
    def test_unsubscribe_is_idempotent(self, bus):
        """Test that calling unsubscribe twice is harmless."""
        unsubscribe = bus.subscribe(Mock())
        unsubscribe()
        unsubscribe()

        assert len(bus) == 0

    @pytest.mark.unit
    def test_same_callback_registered_once(self, bus, metric):
        """Test set semantics for repeated subscriptions."""
        callback = Mock()
        bus.subscribe(callback)
        bus.subscribe(callback)

        bus.publish(metric)

        assert callback.call_count == 1

    @pytest.mark.unit
    def test_failing_subscriber_is_isolated(self, bus, metric):
        """Test that an observer raising does not stop the ones after it."""
        failing = Mock(side_effect=RuntimeError("overlay crashed"))
        healthy = Mock()
        bus.subscribe(failing)
        bus.subscribe(healthy)

        failures = bus.publish(metric)

        assert failures == 1
        assert bus.failure_count == 1
        healthy.assert_called_once_with(metric)

    @pytest.mark.unit
    def test_failing_subscriber_is_logged(self, bus, metric, log_records):
        """Test that subscriber failures are logged with their exception."""
        bus.subscribe(Mock(side_effect=ValueError("bad payload")))

        bus.publish(metric)

        errors = [r for r in log_records if r["level"].name == "ERROR"]
        assert len(errors) == 1
        assert "bad payload" in errors[0]["message"]
        assert errors[0]["exception"] is not None

    @pytest.mark.unit
    def test_subscriber_may_unsubscribe_during_dispatch(self, bus, metric):
        """Test that observers can detach themselves while being notified."""
        calls = []
        holder = {}

        def one_shot(m):
            calls.append(m)
            holder["unsubscribe"]()

        holder["unsubscribe"] = bus.subscribe(one_shot)

        bus.publish(metric)
        bus.publish(metric)

        assert len(calls) == 1

    @pytest.mark.unit
    def test_non_callable_rejected(self, bus):
        """Test that only callables can subscribe."""
        with pytest.raises(TypeError):
            bus.subscribe("not a callback")
