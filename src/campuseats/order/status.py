"""Kitchen status workflow: command and handler.

Completion credits the customer's loyalty points inside the same unit of
work as the status write. The accrual runs only while the stored order is
not yet Completed and has not accrued before. Protean checks the order and
user versions at commit, so a racing writer loses with
``ExpectedVersionError`` instead of double-crediting.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import InputInvalid
from campuseats.loyalty.accrual import accrue_points
from campuseats.loyalty.policy import accrual_for
from campuseats.order.lookup import load_order
from campuseats.order.order import Order, OrderStatus, PaymentMethod, parse_status
from campuseats.payment.payment import Payment, PaymentState
from campuseats.utils import money


@campuseats.command(part_of="Order")
class UpdateOrderStatus:
    order_id: Identifier(required=True)
    status: String(required=True, max_length=20)
    reason: String(max_length=500)


def require_status(value) -> OrderStatus:
    try:
        return parse_status(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InputInvalid({"status": [f"Status must be one of: {allowed}"]}) from None


def loyalty_paid_amount(order_id) -> float:
    """Amount already settled with loyalty points on this order."""
    payments = current_domain.repository_for(Payment)._dao.query.filter(order_id=str(order_id)).all().items
    return money.total(
        p.amount
        for p in payments
        if p.method == PaymentMethod.LOYALTY_POINTS.value and p.status == PaymentState.COMPLETED.value
    )


def apply_status_change(order: Order, target: OrderStatus, reason=None) -> bool:
    """Transition ``order`` and settle loyalty on first completion.

    Shared by the kitchen workflow and customer cancellation. Returns
    whether the order changed; the caller persists it.
    """
    previous = order.status
    changed = order.change_status(target, reason=reason)
    if not changed:
        return False

    logger.info("status changed", order_id=str(order.id), previous=previous, status=order.status)

    if order.awaiting_accrual:
        points = accrual_for(order.total_amount, loyalty_paid_amount(order.id))
        if points > 0:
            accrue_points(
                order.user_id,
                points,
                f"Earned {points:g} points from order {order.order_number}",
                order_id=order.id,
            )
        order.record_accrual(points)
    return True


@campuseats.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        target = require_status(command.status)
        order = load_order(command.order_id)
        if apply_status_change(order, target, reason=command.reason):
            current_domain.repository_for(Order).add(order)
        return order.status
