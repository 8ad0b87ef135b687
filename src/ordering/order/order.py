"""Order aggregate — a durable record of one checkout submission.

Each order carries a single product line, the customer's contact and shipping
details, and a status that moves through a small state machine:

    pending → processing → shipped → completed
    pending/processing → cancelled

Completed and cancelled are terminal. The total is always derived from
price, quantity and the discount share; it is never set directly.
"""

import json
import secrets
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering
from shared import discounts
from ordering.order.events import (
    OrderDetailsUpdated,
    OrderPlaced,
    OrderStatusChanged,
    TrackingNumberAssigned,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    COD = "cod"
    CARD = "card"
    PAYPAL = "paypal"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

# Fields a customer (or an admin) may edit through update_details
EDITABLE_FIELDS = (
    "quantity",
    "fullname",
    "phone",
    "address",
    "alternate_address",
    "city",
    "state",
    "zip_code",
    "payment_method",
)


def _clean(value):
    """Strip text input; blank strings count as missing."""
    if isinstance(value, str):
        return value.strip() or None
    return value


def compute_total(price, quantity, discount_total=0.0):
    if price is None or quantity is None:
        return 0.0
    return round(max(0.0, price * quantity - (discount_total or 0.0)), 2)


def new_tracking_number():
    return f"SM-{secrets.token_hex(4).upper()}"


def check_discount(code, discount_total, price, quantity):
    """Raise unless ``code`` is a known code that can yield ``discount_total`` on this line."""
    if code is None and not discount_total:
        return
    if code is None:
        raise ValidationError({"discount_code": ["A discount requires a discount code"]})
    if discounts.resolve(code) is None:
        raise ValidationError({"discount_code": [f"Unknown discount code: {code}"]})
    if price is None or quantity is None:
        return

    cap = discounts.max_discount(code, price * quantity)
    if discount_total > cap + discounts.ROUNDING_TOLERANCE:
        raise ValidationError({"discount_total": [f"Discount {code} allows at most {cap:.2f} on this order"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True)
    discount_code = String(max_length=50)
    discount_total = Float(default=0.0, min_value=0.0)
    total = Float(default=0.0)
    fullname = String(required=True, max_length=255)
    phone = String(required=True, max_length=20)
    address = String(required=True, max_length=500)
    alternate_address = String(max_length=500)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.COD.value)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking_number = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be positive"]})

    @invariant.post
    def total_is_never_negative(self):
        if self.total is not None and self.total < 0:
            raise ValidationError({"total": ["Total cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        product_name,
        quantity,
        price,
        fullname,
        phone,
        address,
        alternate_address=None,
        city=None,
        state=None,
        zip_code=None,
        payment_method=None,
        discount_total=0.0,
        discount_code=None,
    ):
        """Record a checkout submission as a new pending order.

        A discount is only accepted together with the code that grants it.
        """
        now = datetime.now(UTC)
        discount_total = discount_total or 0.0
        discount_code = discounts.normalize_code(discount_code) or None
        check_discount(discount_code, discount_total, price, quantity)

        order = cls(
            user_id=user_id,
            product_name=_clean(product_name),
            quantity=quantity,
            price=price,
            discount_code=discount_code,
            discount_total=discount_total,
            total=compute_total(price, quantity, discount_total),
            fullname=_clean(fullname),
            phone=_clean(phone),
            address=_clean(address),
            alternate_address=_clean(alternate_address),
            city=_clean(city),
            state=_clean(state),
            zip_code=_clean(zip_code),
            payment_method=_clean(payment_method) or PaymentMethod.COD.value,
            status=OrderStatus.PENDING.value,
            tracking_number=new_tracking_number(),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(order.user_id),
                product_name=order.product_name,
                quantity=order.quantity,
                price=order.price,
                total=order.total,
                tracking_number=order.tracking_number,
                payment_method=order.payment_method,
                placed_at=now,
            )
        )
        return order

    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATUSES

    # -------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Apply a partial update to customer-facing fields and re-derive the total."""
        if self.is_terminal:
            raise ValidationError({"status": [f"A {self.status} order can no longer be modified"]})

        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError({field: ["Field cannot be edited"] for field in unknown})

        if not changes:
            return

        now = datetime.now(UTC)
        with atomic_change(self):
            for field, value in changes.items():
                setattr(self, field, _clean(value))
            if self.payment_method is None:
                self.payment_method = PaymentMethod.COD.value
            if self.discount_code and self.quantity:
                # A smaller order cannot keep more discount than its code grants
                cap = discounts.max_discount(self.discount_code, self.price * self.quantity)
                self.discount_total = min(self.discount_total or 0.0, cap)
            self.total = compute_total(self.price, self.quantity, self.discount_total)
            self.updated_at = now

        self.raise_(
            OrderDetailsUpdated(
                order_id=str(self.id),
                changed_fields=json.dumps(sorted(changes)),
                total=self.total,
                updated_at=now,
            )
        )

    def assign_tracking_number(self, tracking_number):
        tracking_number = _clean(tracking_number)
        if tracking_number is None:
            raise ValidationError({"tracking_number": ["Tracking number cannot be blank"]})
        if tracking_number == self.tracking_number:
            return

        now = datetime.now(UTC)
        self.tracking_number = tracking_number
        self.updated_at = now
        self.raise_(
            TrackingNumberAssigned(
                order_id=str(self.id),
                tracking_number=tracking_number,
                assigned_at=now,
            )
        )

    def change_status(self, new_status):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown status: {new_status}"]}) from None

        current = OrderStatus(self.status)
        if target == current:
            return
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot change status from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )
