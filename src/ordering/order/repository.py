"""List and lookup queries for orders."""

import re

from ordering.domain import ordering
from ordering.order.order import Order


def _digits(phone):
    return re.sub(r"\D", "", phone or "")


@ordering.repository(part_of=Order)
class OrderRepository:
    def list_orders(self, user_id=None, status=None, tracking_number=None) -> list[Order]:
        """Orders matching every given filter, newest first."""
        criteria = {
            key: value
            for key, value in {
                "user_id": user_id,
                "status": status,
                "tracking_number": tracking_number,
            }.items()
            if value
        }
        query = self._dao.query
        if criteria:
            query = query.filter(**criteria)
        return list(query.order_by("-created_at").all().items)

    def find_for_tracking(self, tracking_number, phone) -> Order | None:
        """The order with this tracking number, if the phone number also matches.

        Phone numbers are compared on their digits only.
        """
        results = self._dao.query.filter(tracking_number=tracking_number).all()
        wanted = _digits(phone)
        if not wanted:
            return None
        return next((order for order in results.items if _digits(order.phone) == wanted), None)
