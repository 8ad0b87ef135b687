from unittest.mock import MagicMock

import pytest
from storefront.errors import ApiError
from storefront.tracking import OrderTracker, order_history


def _snapshot(status):
    return {"id": "order-1", "status": status, "tracking_number": "SM-1"}


def _tracker(responses, **kwargs):
    client = MagicMock()
    client.track_order.side_effect = responses
    sleeps = []
    tracker = OrderTracker(client, sleep=sleeps.append, **kwargs)
    return tracker, client, sleeps


class TestOrderTracker:
    def test_stops_at_a_terminal_status(self):
        tracker, client, sleeps = _tracker(
            [_snapshot("pending"), _snapshot("shipped"), _snapshot("completed"), _snapshot("completed")],
            interval=5,
        )

        statuses = [order["status"] for order in tracker.poll("SM-1", "9876543210")]

        assert statuses == ["pending", "shipped", "completed"]
        assert client.track_order.call_count == 3
        assert sleeps == [5, 5]

    @pytest.mark.parametrize("terminal", ["cancelled", "delivered"])
    def test_other_terminal_statuses(self, terminal):
        tracker, _, _ = _tracker([_snapshot(terminal)])
        assert [o["status"] for o in tracker.poll("SM-1", "1")] == [terminal]

    def test_backoff_is_capped(self):
        tracker, _, sleeps = _tracker(
            [_snapshot("pending")] * 4 + [_snapshot("completed")],
            interval=10,
            backoff=2.0,
            max_interval=50,
        )

        list(tracker.poll("SM-1", "1"))

        assert sleeps == [10, 20, 40, 50]

    def test_max_polls(self):
        tracker, client, sleeps = _tracker([_snapshot("pending")] * 10, interval=1, max_polls=3)

        assert len(list(tracker.poll("SM-1", "1"))) == 3
        assert client.track_order.call_count == 3
        assert len(sleeps) == 2

    def test_transient_errors_are_skipped(self):
        tracker, _, _ = _tracker(
            [ApiError(None, "Network error: timeout"), ApiError(503, "unavailable"), _snapshot("completed")],
            interval=1,
        )

        assert [o["status"] for o in tracker.poll("SM-1", "1")] == ["completed"]

    def test_unknown_order_ends_polling(self):
        tracker, _, _ = _tracker([ApiError(404, "Not found")])

        with pytest.raises(ApiError):
            list(tracker.poll("SM-1", "1"))

    @pytest.mark.parametrize("kwargs", [{"interval": 0}, {"backoff": 0.5}])
    def test_rejects_bad_settings(self, kwargs):
        with pytest.raises(ValueError):
            OrderTracker(MagicMock(), **kwargs)


class TestOrderHistory:
    def test_passes_the_status_filter(self):
        client = MagicMock()
        client.list_orders.return_value = [_snapshot("pending")]

        assert order_history(client, status="pending") == [_snapshot("pending")]
        client.list_orders.assert_called_once_with(status="pending")
