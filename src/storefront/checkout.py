"""Checkout: validate the shipping form, then turn cart lines into orders."""

from dataclasses import asdict, dataclass

import structlog

from storefront.cart import Cart
from storefront.client import StorefrontClient
from storefront.errors import CheckoutValidationError

logger = structlog.get_logger(__name__)

PAYMENT_METHODS = ("cod", "card", "paypal")


@dataclass
class CheckoutForm:
    fullname: str = ""
    phone: str = ""
    address: str = ""
    alternate_address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    payment_method: str = "cod"


def validate_order(form: CheckoutForm, quantity, price) -> None:
    """Raise CheckoutValidationError for the first missing or invalid field.

    Fields are checked in the order fullname, phone, address, quantity, price.
    """
    for field in ("fullname", "phone", "address"):
        if not (getattr(form, field) or "").strip():
            raise CheckoutValidationError(field, f"{field} is required")

    if quantity is None or quantity <= 0:
        raise CheckoutValidationError("quantity", "quantity must be positive")
    if price is None or price <= 0:
        raise CheckoutValidationError("price", "price must be positive")

    if form.payment_method not in PAYMENT_METHODS:
        raise CheckoutValidationError("payment_method", f"payment_method must be one of {', '.join(PAYMENT_METHODS)}")


def apportion_discount(line_totals: list[float], discount: float) -> list[float]:
    """Split ``discount`` across lines in proportion to their totals.

    Shares are rounded to two decimals; the last line absorbs the rounding
    remainder so the shares add up to ``discount`` exactly.
    """
    if not line_totals:
        return []

    grand_total = sum(line_totals)
    if discount <= 0 or grand_total <= 0:
        return [0.0] * len(line_totals)

    shares = [round(discount * total / grand_total, 2) for total in line_totals[:-1]]
    shares.append(round(discount - sum(shares), 2))
    return shares


class Checkout:
    def __init__(self, cart: Cart, client: StorefrontClient):
        self.cart = cart
        self.client = client

    def submit(self, form: CheckoutForm) -> list[dict]:
        """Place one order per cart line and return the created orders.

        Every line is validated before anything is sent. A line is removed
        from the cart once its order is accepted; when all lines succeed the
        cart is cleared. An ApiError stops submission and leaves the lines
        that were not placed in the cart, with whatever part of a fixed
        discount was not yet spent.
        """
        items = self.cart.items
        if not items:
            raise CheckoutValidationError("cart", "cart is empty")

        for item in items:
            validate_order(form, item.quantity, item.price)

        discount = self.cart.discount
        discount_code = discount.code if discount.is_active else None
        discount_total = self.cart.total_price - self.cart.final_price
        shares = apportion_discount([item.line_total for item in items], discount_total)

        details = asdict(form)
        orders = []
        for item, share in zip(items, shares, strict=True):
            payload = {
                **details,
                "product_name": item.name,
                "quantity": item.quantity,
                "price": item.price,
                "discount_code": discount_code,
                "discount_total": share,
            }
            order = self.client.place_order(payload)
            orders.append(order)
            self.cart.remove_item(item.id)
            self.cart.consume_discount(share)
            logger.info(
                "order_submitted",
                order_id=order["id"],
                tracking_number=order.get("tracking_number"),
                total=order.get("total"),
            )

        self.cart.clear_cart()
        return orders
