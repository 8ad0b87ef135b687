"""Order edits and deletion — commands and handler.

``UpdateOrder`` carries a partial update as JSON so that "clear this field"
and "leave this field alone" stay distinguishable. All parts of one update
are applied to the aggregate in a single unit of work.
"""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrder:
    order_id = Identifier(required=True)
    changes = Text(required=True)  # JSON: {field: value}


@ordering.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class AdministerOrderHandler:
    @handle(UpdateOrder)
    def update_order(self, command):
        changes = json.loads(command.changes) if isinstance(command.changes, str) else dict(command.changes)

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        status = changes.pop("status", None)
        tracking_number = changes.pop("tracking_number", None)

        # Details first: a status change may make the order terminal
        if changes:
            order.update_details(**changes)
        if tracking_number is not None:
            order.assign_tracking_number(tracking_number)
        if status is not None:
            order.change_status(status)

        repo.add(order)

    @handle(DeleteOrder)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        repo._dao.delete(order)
        logger.info("order_deleted", order_id=str(command.order_id))
