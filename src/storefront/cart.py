"""Shopping cart state container.

The cart is owned by one shopper session. Every mutation is written through
to device storage, and the cart is restored from it on construction. Totals
are derived from the items on every read.
"""

import structlog

from storefront.coupons import lookup_discount
from storefront.models import CartItem, Discount, DiscountType
from storefront.storage import CartLoadError, CartStorage

logger = structlog.get_logger(__name__)

LOAD_FAILED = "Failed to load cart data"
INVALID_DISCOUNT = "Invalid discount code"
DISCOUNT_FAILED = "Failed to apply discount"


class Cart:
    def __init__(self, storage: CartStorage | None = None, discount_lookup=lookup_discount):
        self.storage = storage if storage is not None else CartStorage()
        self.discount_lookup = discount_lookup
        self._items: dict[str, CartItem] = {}
        self._discount = Discount.none()
        self.is_loading = False
        self.error: str | None = None
        self._load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _load(self) -> None:
        try:
            items = self.storage.load_items()
            discount = self.storage.load_discount()
        except CartLoadError as exc:
            logger.warning("cart_load_failed", error=str(exc))
            self.error = LOAD_FAILED
            return

        self._items = {item.id: item for item in items}
        self._discount = discount

    def _save(self) -> None:
        try:
            self.storage.save(list(self._items.values()), self._discount)
        except OSError as exc:
            logger.error("cart_save_failed", error=str(exc))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_item(self, item: CartItem, quantity: int = 1) -> None:
        """Add ``quantity`` of ``item``, merging with an existing line of the same id."""
        existing = self._items.get(item.id)
        if existing is not None:
            wanted = existing.quantity + quantity
            if wanted < 1:
                return
            # The incoming item carries the current per-cart limit
            self._items[item.id] = existing.model_copy(
                update={"quantity": item.clamp(wanted), "max_quantity": item.max_quantity}
            )
        else:
            if quantity < 1:
                return
            self._items[item.id] = item.model_copy(update={"quantity": item.clamp(quantity)})
        self._save()

    def remove_item(self, item_id: str) -> None:
        if self._items.pop(item_id, None) is not None:
            self._save()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(item_id)
            return

        existing = self._items.get(item_id)
        if existing is None:
            return
        self._items[item_id] = existing.model_copy(update={"quantity": existing.clamp(quantity)})
        self._save()

    def clear_cart(self) -> None:
        self._items = {}
        self._discount = Discount.none()
        self.error = None
        try:
            self.storage.clear()
        except OSError as exc:
            logger.error("cart_clear_failed", error=str(exc))

    async def apply_discount(self, code: str) -> bool:
        """Look up ``code`` and make it the active discount.

        Returns True when the code was accepted. An unknown code leaves the
        current discount in place and sets ``error``.
        """
        self.is_loading = True
        try:
            discount = await self.discount_lookup(code)
        except Exception:
            logger.exception("discount_lookup_failed", code=code)
            self.error = DISCOUNT_FAILED
            return False
        finally:
            self.is_loading = False

        if discount is None:
            logger.info("discount_rejected", code=code)
            self.error = INVALID_DISCOUNT
            return False

        self._discount = discount
        self.error = None
        self._save()
        logger.info("discount_applied", code=discount.code, amount=discount.amount, type=discount.type.value)
        return True

    def consume_discount(self, amount: float) -> None:
        """Spend ``amount`` of a fixed discount.

        A fixed code is worth a set sum across every order it is used on, so
        whatever is spent comes off what is left. Percentage codes are left as
        they are.
        """
        if self._discount.type is not DiscountType.FIXED or amount <= 0:
            return

        remaining = round(self._discount.amount - amount, 2)
        if remaining > 0:
            self._discount = self._discount.model_copy(update={"amount": remaining})
        else:
            self._discount = Discount.none()
        self._save()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_item_quantity(self, item_id: str) -> int:
        item = self._items.get(item_id)
        return item.quantity if item is not None else 0

    def is_item_in_cart(self, item_id: str) -> bool:
        return item_id in self._items

    @property
    def items(self) -> list[CartItem]:
        return list(self._items.values())

    @property
    def discount(self) -> Discount:
        return self._discount

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self._items.values())

    @property
    def total_price(self) -> float:
        return sum(item.line_total for item in self._items.values())

    @property
    def final_price(self) -> float:
        return self._discount.apply(self.total_price)
