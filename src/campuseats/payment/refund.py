"""Card refunds: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import BusinessRuleViolation
from campuseats.order.lookup import load_order
from campuseats.order.order import Order
from campuseats.payment.gateway import get_gateway
from campuseats.payment.lookup import load_payment
from campuseats.payment.payment import Payment
from campuseats.payment.settlement import order_payments, settle_order


@campuseats.command(part_of="Payment")
class RefundPayment:
    payment_id: Identifier(required=True)
    reason: String(max_length=500)


@campuseats.command_handler(part_of=Payment)
class RefundPaymentHandler:
    @handle(RefundPayment)
    def refund_payment(self, command):
        payment = load_payment(command.payment_id)
        payment.ensure_refundable()

        reason = command.reason or "Refunded on request"
        result = get_gateway().create_refund(
            gateway_reference=payment.gateway_reference,
            amount=payment.amount,
            reason=reason,
        )
        if not result.success:
            raise BusinessRuleViolation({"payment": [f"Refund failed: {result.failure_reason}"]})

        payment.refund(result.gateway_refund_reference, reason=reason)

        order = load_order(payment.order_id)
        settle_order(order, order_payments(order.id, current=payment))
        current_domain.repository_for(Payment).add(payment)
        current_domain.repository_for(Order).add(order)

        logger.info("payment refunded", payment_id=str(payment.id), order_id=str(order.id), amount=payment.amount)
        return payment.status
