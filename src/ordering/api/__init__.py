"""Ordering domain API package."""

from ordering.api.routes import order_router, tracking_router

__all__ = ["order_router", "tracking_router"]
