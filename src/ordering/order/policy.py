"""Access rules for orders.

Every role decision about orders is made here; routes call these functions
and never compare roles themselves.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.order.order import OrderStatus
from shared.errors import AuthorizationError

# Fields only an admin may change
ADMIN_ONLY_FIELDS = frozenset({"status", "tracking_number"})


def owns(principal, order):
    return str(order.user_id) == principal.user_id


def scoped_user_filter(principal, user_id=None):
    """The user filter a listing must apply for this caller.

    Admins may list anyone's orders (or all of them); everyone else is pinned
    to their own.
    """
    if principal.is_admin:
        return user_id or None
    return principal.user_id


def ensure_can_view(principal, order):
    if principal.is_admin or owns(principal, order):
        return
    # Do not reveal that someone else's order exists
    raise ObjectNotFoundError(f"Order {order.id} not found")


def ensure_can_update(principal, order, changes):
    if principal.is_admin:
        return

    restricted = sorted(ADMIN_ONLY_FIELDS & set(changes))
    if restricted:
        raise AuthorizationError(f"Only admins can change {', '.join(restricted)}")
    if not owns(principal, order):
        raise AuthorizationError("You can only edit your own orders")
    if order.status != OrderStatus.PENDING.value:
        raise ValidationError({"status": ["Only pending orders can be edited"]})


def ensure_can_delete(principal):
    if not principal.is_admin:
        raise AuthorizationError("Only admins can delete orders")
