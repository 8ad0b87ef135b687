"""Admin dashboard: full order and user lists with edit, delete and export."""

from pathlib import Path

import structlog
from openpyxl import Workbook

from storefront.client import StorefrontClient

logger = structlog.get_logger(__name__)

EXPORT_SHEET = "Orders"

EXPORT_COLUMNS = [
    ("id", "Order ID"),
    ("created_at", "Placed At"),
    ("fullname", "Customer"),
    ("phone", "Phone"),
    ("address", "Address"),
    ("alternate_address", "Alternate Address"),
    ("city", "City"),
    ("state", "State"),
    ("zip_code", "Zip Code"),
    ("product_name", "Product"),
    ("quantity", "Quantity"),
    ("price", "Unit Price"),
    ("discount_code", "Discount Code"),
    ("discount_total", "Discount"),
    ("total", "Total"),
    ("payment_method", "Payment Method"),
    ("status", "Status"),
    ("tracking_number", "Tracking Number"),
]


def orders_to_rows(orders: list[dict]) -> list[list]:
    """Header row followed by one row per order. Missing values stay None."""
    rows = [[title for _, title in EXPORT_COLUMNS]]
    for order in orders:
        rows.append([order.get(key) for key, _ in EXPORT_COLUMNS])
    return rows


def _matches(record: dict, needle: str, keys) -> bool:
    return any(needle in str(record.get(key) or "").lower() for key in keys)


class AdminDashboard:
    ORDER_SEARCH_KEYS = ("id", "fullname", "phone", "product_name", "tracking_number", "status", "city")
    USER_SEARCH_KEYS = ("email", "display_name")

    def __init__(self, client: StorefrontClient):
        self.client = client
        self.orders: list[dict] = []
        self.users: list[dict] = []

    def refresh(self) -> None:
        self.orders = self.client.list_orders()
        self.users = self.client.list_users()
        logger.info("dashboard_refreshed", orders=len(self.orders), users=len(self.users))

    def search_orders(self, text: str | None) -> list[dict]:
        needle = (text or "").strip().lower()
        if not needle:
            return list(self.orders)
        return [order for order in self.orders if _matches(order, needle, self.ORDER_SEARCH_KEYS)]

    def search_users(self, text: str | None) -> list[dict]:
        needle = (text or "").strip().lower()
        if not needle:
            return list(self.users)
        return [user for user in self.users if _matches(user, needle, self.USER_SEARCH_KEYS)]

    def update_order(self, order_id: str, **changes) -> dict:
        updated = self.client.update_order(order_id, **changes)
        self.orders = [updated if order["id"] == order_id else order for order in self.orders]
        return updated

    def delete_order(self, order_id: str) -> None:
        self.client.delete_order(order_id)
        self.orders = [order for order in self.orders if order["id"] != order_id]

    def delete_user(self, user_id: str) -> None:
        self.client.delete_user(user_id)
        self.users = [user for user in self.users if user["id"] != user_id]

    def export_orders(self, path) -> Path:
        """Write the loaded orders to an ``Orders`` sheet in a new workbook at ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = EXPORT_SHEET
        for row in orders_to_rows(self.orders):
            sheet.append(row)
        workbook.save(path)

        logger.info("orders_exported", path=str(path), count=len(self.orders))
        return path
