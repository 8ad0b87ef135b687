"""Pydantic request/response schemas for the Ordering API.

Request fields are optional at this layer: missing or blank values are
reported by the domain as field errors (HTTP 400) rather than as schema
errors.
"""

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    product_name: str | None = None
    quantity: int | None = None
    price: float | None = None
    discount_code: str | None = None
    discount_total: float = 0.0
    fullname: str | None = None
    phone: str | None = None
    address: str | None = None
    alternate_address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    payment_method: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_name": "Sasya Mantra Herbal Hair Growth Oil",
                    "quantity": 2,
                    "price": 100.0,
                    "fullname": "Asha Rao",
                    "phone": "9876543210",
                    "address": "12 MG Road",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                    "zip_code": "560001",
                    "payment_method": "cod",
                }
            ]
        }
    }


class UpdateOrderRequest(BaseModel):
    """Partial update. Only the fields present in the body are applied."""

    id: str | None = None
    quantity: int | None = None
    fullname: str | None = None
    phone: str | None = None
    address: str | None = None
    alternate_address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    payment_method: str | None = None
    status: str | None = None
    tracking_number: str | None = None


class TrackOrderRequest(BaseModel):
    tracking_number: str | None = None
    phone: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderResponse(BaseModel):
    id: str
    user_id: str
    product_name: str
    quantity: int
    price: float
    discount_code: str | None = None
    discount_total: float = 0.0
    total: float
    fullname: str
    phone: str
    address: str
    alternate_address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    payment_method: str
    status: str
    tracking_number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order):
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            product_name=order.product_name,
            quantity=order.quantity,
            price=order.price,
            discount_code=order.discount_code,
            discount_total=order.discount_total or 0.0,
            total=order.total,
            fullname=order.fullname,
            phone=order.phone,
            address=order.address,
            alternate_address=order.alternate_address,
            city=order.city,
            state=order.state,
            zip_code=order.zip_code,
            payment_method=order.payment_method,
            status=order.status,
            tracking_number=order.tracking_number,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class TrackedOrder(BaseModel):
    """What an unauthenticated tracking lookup may reveal."""

    id: str
    product_name: str
    quantity: int
    price: float
    total: float
    status: str
    tracking_number: str
    fullname: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order):
        return cls(
            id=str(order.id),
            product_name=order.product_name,
            quantity=order.quantity,
            price=order.price,
            total=order.total,
            status=order.status,
            tracking_number=order.tracking_number,
            fullname=order.fullname,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class TrackOrderResponse(BaseModel):
    order: TrackedOrder


class StatusResponse(BaseModel):
    status: str = "ok"
