"""Gateway/till confirmation of a pending payment: command and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.order.lookup import load_order
from campuseats.order.order import Order, PaymentStatus
from campuseats.payment.lookup import load_payment
from campuseats.payment.payment import Payment
from campuseats.payment.settlement import order_payments, settle_order


@campuseats.command(part_of="Payment")
class ConfirmPayment:
    """Outcome reported by the gateway for a card charge, or by staff for cash."""

    payment_id: Identifier(required=True)
    succeeded: Boolean(required=True)
    gateway_reference: String(max_length=255)
    failure_reason: String(max_length=500)


@campuseats.command_handler(part_of=Payment)
class ConfirmPaymentHandler:
    @handle(ConfirmPayment)
    def confirm_payment(self, command):
        payment = load_payment(command.payment_id)
        order = load_order(payment.order_id)

        if command.succeeded:
            payment.complete(gateway_reference=command.gateway_reference)
        else:
            payment.fail(command.failure_reason or "Payment failed")
            if order.payment_status != PaymentStatus.PAID.value:
                order.set_payment_status(PaymentStatus.FAILED)

        settle_order(order, order_payments(order.id, current=payment))
        current_domain.repository_for(Payment).add(payment)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "payment confirmed",
            payment_id=str(payment.id),
            order_id=str(order.id),
            status=payment.status,
            order_payment_status=order.payment_status,
        )
        return payment.status
