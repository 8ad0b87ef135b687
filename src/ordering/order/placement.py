"""Order placement — command and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer()
    price = Float()
    discount_code = String(max_length=50)
    discount_total = Float(default=0.0)
    fullname = String(max_length=255)
    phone = String(max_length=20)
    address = String(max_length=500)
    alternate_address = String(max_length=500)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    payment_method = String(max_length=20)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = Order.place(
            user_id=command.user_id,
            product_name=command.product_name,
            quantity=command.quantity,
            price=command.price,
            discount_code=command.discount_code,
            discount_total=command.discount_total,
            fullname=command.fullname,
            phone=command.phone,
            address=command.address,
            alternate_address=command.alternate_address,
            city=command.city,
            state=command.state,
            zip_code=command.zip_code,
            payment_method=command.payment_method,
        )
        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(order.user_id),
            tracking_number=order.tracking_number,
            total=order.total,
        )
        return str(order.id)
