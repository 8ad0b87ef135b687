"""FastAPI routes for orders and public order tracking."""

import json

from fastapi import APIRouter, Depends, Query, Request
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from identity.api.auth import Principal, current_principal
from ordering.api.schemas import (
    OrderResponse,
    PlaceOrderRequest,
    StatusResponse,
    TrackedOrder,
    TrackOrderRequest,
    TrackOrderResponse,
    UpdateOrderRequest,
)
from ordering.order import policy
from ordering.order.administration import DeleteOrder, UpdateOrder
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(current_principal)) -> OrderResponse:
    command = PlaceOrder(
        user_id=principal.user_id,
        product_name=body.product_name,
        quantity=body.quantity,
        price=body.price,
        discount_code=body.discount_code,
        discount_total=body.discount_total,
        fullname=body.fullname,
        phone=body.phone,
        address=body.address,
        alternate_address=body.alternate_address,
        city=body.city,
        state=body.state,
        zip_code=body.zip_code,
        payment_method=body.payment_method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse.from_order(order)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    user_id: str | None = Query(default=None),
    tracking_number: str | None = Query(default=None),
    status: str | None = Query(default=None),
    principal: Principal = Depends(current_principal),
) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).list_orders(
        user_id=policy.scoped_user_filter(principal, user_id),
        status=status,
        tracking_number=tracking_number,
    )
    return [OrderResponse.from_order(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    policy.ensure_can_view(principal, order)
    return OrderResponse.from_order(order)


@order_router.patch("", response_model=OrderResponse)
async def update_order(body: UpdateOrderRequest, principal: Principal = Depends(current_principal)) -> OrderResponse:
    changes = body.model_dump(exclude_unset=True)
    order_id = changes.pop("id", None)
    if not order_id:
        raise ValidationError({"id": ["Order id is required"]})

    repo = current_domain.repository_for(Order)
    order = repo.get(order_id)
    policy.ensure_can_update(principal, order, changes)

    if changes:
        current_domain.process(UpdateOrder(order_id=order_id, changes=json.dumps(changes)), asynchronous=False)
        order = repo.get(order_id)
    return OrderResponse.from_order(order)


@order_router.delete("", response_model=StatusResponse)
async def delete_order(
    request: Request,
    id: str | None = Query(default=None),  # noqa: A002
    principal: Principal = Depends(current_principal),
) -> StatusResponse:
    policy.ensure_can_delete(principal)

    order_id = id
    if not order_id:
        raw = await request.body()
        if raw:
            try:
                order_id = (json.loads(raw) or {}).get("id")
            except (ValueError, AttributeError):
                raise ValidationError({"body": ["Request body must be a JSON object"]}) from None
    if not order_id:
        raise ValidationError({"id": ["Order id is required"]})

    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Tracking Router (no session required)
# ---------------------------------------------------------------------------
tracking_router = APIRouter(prefix="/track", tags=["tracking"])


@tracking_router.post("", response_model=TrackOrderResponse)
async def track_order(body: TrackOrderRequest) -> TrackOrderResponse:
    errors = {}
    if not (body.tracking_number or "").strip():
        errors["tracking_number"] = ["Tracking number is required"]
    if not (body.phone or "").strip():
        errors["phone"] = ["Phone is required"]
    if errors:
        raise ValidationError(errors)

    order = current_domain.repository_for(Order).find_for_tracking(body.tracking_number.strip(), body.phone)
    if order is None:
        raise ObjectNotFoundError("Order not found")
    return TrackOrderResponse(order=TrackedOrder.from_order(order))
