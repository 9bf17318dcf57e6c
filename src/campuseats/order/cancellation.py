"""Customer cancellation: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import NotOrderOwner, OrderFinalized
from campuseats.order.lookup import load_order
from campuseats.order.order import Order, OrderStatus
from campuseats.order.status import apply_status_change


@campuseats.command(part_of="Order")
class CancelOrder:
    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    reason: String(max_length=500)


@campuseats.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_order(command.order_id)
        if str(order.user_id) != str(command.user_id):
            raise NotOrderOwner({"order": ["You are not authorized to cancel this order"]})

        if order.current_status == OrderStatus.COMPLETED:
            raise OrderFinalized({"status": ["Cannot cancel completed order"]})
        if order.current_status == OrderStatus.CANCELLED:
            raise OrderFinalized({"status": ["Order is already cancelled"]})

        apply_status_change(order, OrderStatus.CANCELLED, reason=command.reason)
        current_domain.repository_for(Order).add(order)

        logger.info("order cancelled", order_id=str(order.id), user_id=str(command.user_id))
        return order.status
