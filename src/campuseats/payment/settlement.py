"""Working out how much of an order its payments cover."""

from protean.utils.globals import current_domain

from campuseats.order.order import Order, OrderStatus, PaymentStatus
from campuseats.payment.payment import Payment, PaymentState
from campuseats.utils import money

# Rounding slack when comparing paid amounts against the order total
TOLERANCE = 0.01


def order_payments(order_id, current: Payment | None = None) -> list[Payment]:
    """Stored payments for the order, with ``current`` overlaid if given."""
    stored = current_domain.repository_for(Payment)._dao.query.filter(order_id=str(order_id)).all().items
    payments = {str(p.id): p for p in stored}
    if current is not None:
        payments[str(current.id)] = current
    return list(payments.values())


def completed_total(payments) -> float:
    return money.total(p.amount for p in payments if p.status == PaymentState.COMPLETED.value)


def remaining_balance(order: Order, payments) -> float:
    return max(money.subtract(order.total_amount, completed_total(payments)), 0.0)


def settle_order(order: Order, payments) -> None:
    """Mark the order Paid once completed payments cover its total.

    An order that was Paid and is no longer covered (after a refund) drops
    back to Refunded. Cancelled orders keep the status cancellation gave them.
    """
    if order.current_status == OrderStatus.CANCELLED:
        return

    covered = completed_total(payments)
    if covered >= money.subtract(order.total_amount, TOLERANCE):
        order.set_payment_status(PaymentStatus.PAID)
    elif order.payment_status == PaymentStatus.PAID.value:
        order.set_payment_status(PaymentStatus.REFUNDED)
