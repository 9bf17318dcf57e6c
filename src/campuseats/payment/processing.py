"""Taking payment for an order: command and handler.

Card payments open a gateway charge and wait for ConfirmPayment; cash waits
for the till to confirm; loyalty points are debited from the ledger and the
payment completes on the spot.
"""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import BusinessRuleViolation, InputInvalid
from campuseats.loyalty.policy import discount_for, points_for
from campuseats.order.lookup import load_order
from campuseats.order.order import Order, OrderStatus, PaymentMethod, PaymentStatus
from campuseats.payment.gateway import get_gateway
from campuseats.payment.payment import Payment
from campuseats.payment.settlement import TOLERANCE, order_payments, remaining_balance, settle_order
from campuseats.user.queries import load_user
from campuseats.user.user import User
from campuseats.utils import money

CURRENCY = "RON"

_ACCEPTED_METHODS = (PaymentMethod.CARD, PaymentMethod.CASH, PaymentMethod.LOYALTY_POINTS)


@campuseats.command(part_of="Payment")
class ProcessPayment:
    order_id: Identifier(required=True)
    method: String(required=True, max_length=20)
    amount: Float(required=True)
    loyalty_points_used: Float()


def _validate(command) -> PaymentMethod:
    errors = {}
    if command.amount <= 0:
        errors["amount"] = ["Amount must be greater than 0"]

    method = None
    if command.method == PaymentMethod.MIXED.value:
        errors["method"] = ["Mixed payments must be split into separate payments"]
    elif command.method not in [m.value for m in _ACCEPTED_METHODS]:
        errors["method"] = ["Payment method must be 'Card', 'Cash', or 'LoyaltyPoints'"]
    else:
        method = PaymentMethod(command.method)

    if command.loyalty_points_used is not None and command.loyalty_points_used <= 0:
        errors["loyalty_points_used"] = ["Loyalty points used must be greater than 0"]

    if errors:
        raise InputInvalid(errors)
    return method


def _charge_card(payment: Payment, order: Order) -> None:
    result = get_gateway().create_charge(
        amount=payment.amount,
        currency=CURRENCY,
        description=f"Order {order.order_number}",
        idempotency_key=str(payment.id),
    )
    if result.success:
        payment.start_processing(result.gateway_reference)
        return

    payment.fail(result.failure_reason or "Charge declined")
    if order.payment_status != PaymentStatus.PAID.value:
        order.set_payment_status(PaymentStatus.FAILED)
    logger.warning("card charge declined", payment_id=str(payment.id), reason=payment.failure_reason)


def _pay_with_points(payment: Payment, order: Order) -> None:
    needed = points_for(payment.amount)
    points = payment.loyalty_points_used
    if points is None:
        points = needed
        payment.loyalty_points_used = points
    elif discount_for(points) < money.subtract(payment.amount, TOLERANCE):
        raise BusinessRuleViolation(
            {"loyalty_points_used": [f"{points:g} points do not cover {payment.amount:.2f} {CURRENCY}"]}
        )
    elif points > needed:
        raise BusinessRuleViolation(
            {
                "loyalty_points_used": [
                    f"{points:g} points exceed the {needed:g} points needed for {payment.amount:.2f} {CURRENCY}"
                ]
            }
        )

    user = load_user(order.user_id)
    user.redeem_points(
        points,
        f"Paid {payment.amount:.2f} {CURRENCY} for order {order.order_number} with loyalty points",
        order_id=order.id,
    )
    current_domain.repository_for(User).add(user)
    payment.complete()


@campuseats.command_handler(part_of=Payment)
class ProcessPaymentHandler:
    @handle(ProcessPayment)
    def process_payment(self, command):
        method = _validate(command)
        order = load_order(command.order_id)

        if order.current_status == OrderStatus.CANCELLED:
            raise BusinessRuleViolation({"order": ["Cannot pay for a cancelled order"]})

        remaining = remaining_balance(order, order_payments(order.id))
        if command.amount > remaining + TOLERANCE:
            raise BusinessRuleViolation(
                {"amount": [f"Amount ({command.amount:.2f}) exceeds remaining balance ({remaining:.2f})"]}
            )

        payment = Payment.initiate(
            order_id=order.id,
            user_id=order.user_id,
            amount=money.quantize(command.amount),
            method=method.value,
            loyalty_points_used=command.loyalty_points_used,
        )

        if method == PaymentMethod.CARD:
            _charge_card(payment, order)
        elif method == PaymentMethod.LOYALTY_POINTS:
            _pay_with_points(payment, order)

        settle_order(order, order_payments(order.id, current=payment))
        current_domain.repository_for(Payment).add(payment)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "payment processed",
            payment_id=str(payment.id),
            order_id=str(order.id),
            method=payment.method,
            status=payment.status,
            amount=payment.amount,
        )
        return str(payment.id)
