"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A checkout submission was recorded as a new pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_name = String(required=True)
    quantity = Integer(required=True)
    price = Float(required=True)
    total = Float(required=True)
    tracking_number = String(required=True)
    payment_method = String()
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDetailsUpdated:
    """Customer-facing fields (quantity, contact, address) were edited."""

    __version__ = 1

    order_id = Identifier(required=True)
    changed_fields = Text(required=True)  # JSON: sorted list of field names
    total = Float(required=True)
    updated_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class TrackingNumberAssigned:
    __version__ = 1

    order_id = Identifier(required=True)
    tracking_number = String(required=True)
    assigned_at = DateTime(required=True)
