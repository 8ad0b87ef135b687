"""Order history and status polling."""

import time

import structlog

from storefront.client import StorefrontClient
from storefront.errors import ApiError

logger = structlog.get_logger(__name__)

TERMINAL_STATUSES = frozenset({"completed", "cancelled", "delivered"})


def order_history(client: StorefrontClient, status: str | None = None) -> list[dict]:
    """The signed-in shopper's orders, newest first."""
    return client.list_orders(status=status)


class OrderTracker:
    """Re-fetch an order's status until it settles.

    The wait between polls starts at ``interval`` seconds and is multiplied by
    ``backoff`` after every poll, up to ``max_interval``.
    """

    def __init__(
        self,
        client: StorefrontClient,
        interval: float = 30.0,
        backoff: float = 1.0,
        max_interval: float = 300.0,
        max_polls: int | None = None,
        sleep=time.sleep,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        if backoff < 1.0:
            raise ValueError("backoff must be at least 1.0")
        self.client = client
        self.interval = interval
        self.backoff = backoff
        self.max_interval = max(max_interval, interval)
        self.max_polls = max_polls
        self.sleep = sleep

    def check(self, tracking_number: str, phone: str) -> dict:
        return self.client.track_order(tracking_number, phone)

    def poll(self, tracking_number: str, phone: str):
        """Yield each fetched order snapshot; stop once its status is terminal.

        Lookups that fail with an ApiError are logged and retried on the next
        tick, except a 404 or 400, which end polling by raising.
        """
        delay = self.interval
        polls = 0
        while self.max_polls is None or polls < self.max_polls:
            polls += 1
            try:
                order = self.check(tracking_number, phone)
            except ApiError as exc:
                if exc.status_code in (400, 404):
                    raise
                logger.warning("tracking_poll_failed", tracking_number=tracking_number, error=exc.message)
            else:
                yield order
                if order.get("status") in TERMINAL_STATUSES:
                    logger.info("tracking_settled", tracking_number=tracking_number, status=order["status"])
                    return

            if self.max_polls is not None and polls >= self.max_polls:
                return
            self.sleep(delay)
            delay = min(delay * self.backoff, self.max_interval)
