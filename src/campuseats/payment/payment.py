"""Payment aggregate: one payment attempt against an order.

State Machine:
    PENDING → PROCESSING → COMPLETED → REFUNDED
    PENDING/PROCESSING → FAILED
    PENDING → COMPLETED (cash confirmed at the till, loyalty points)
"""

from datetime import datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, String

from campuseats.domain import campuseats
from campuseats.errors import BusinessRuleViolation
from campuseats.order.order import PaymentMethod


class PaymentState(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"


_VALID_TRANSITIONS = {
    PaymentState.PENDING: {PaymentState.PROCESSING, PaymentState.COMPLETED, PaymentState.FAILED},
    PaymentState.PROCESSING: {PaymentState.COMPLETED, PaymentState.FAILED},
    PaymentState.COMPLETED: {PaymentState.REFUNDED},
    PaymentState.FAILED: set(),  # Terminal
    PaymentState.REFUNDED: set(),  # Terminal
}


@campuseats.aggregate
class Payment:
    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    amount: Float(required=True, min_value=0.01)
    method: String(required=True, choices=PaymentMethod)
    status: String(choices=PaymentState, default=PaymentState.PENDING.value)
    gateway_reference: String(max_length=255)
    gateway_refund_reference: String(max_length=255)
    loyalty_points_used: Float()
    failure_reason: String(max_length=500)
    refund_reason: String(max_length=500)
    created_at: DateTime(default=datetime.now)
    paid_at: DateTime()
    failed_at: DateTime()
    refunded_at: DateTime()

    @classmethod
    def initiate(cls, order_id, user_id, amount, method, loyalty_points_used=None):
        from campuseats.payment.events import PaymentInitiated

        now = datetime.now()
        payment = cls(
            order_id=order_id,
            user_id=user_id,
            amount=amount,
            method=method,
            loyalty_points_used=loyalty_points_used,
            created_at=now,
        )
        payment.raise_(
            PaymentInitiated(
                payment_id=payment.id,
                order_id=order_id,
                user_id=user_id,
                amount=amount,
                method=method,
                initiated_at=now,
            )
        )
        return payment

    @property
    def state(self) -> PaymentState:
        return PaymentState(self.status)

    def _assert_can_transition(self, target: PaymentState) -> None:
        if target not in _VALID_TRANSITIONS[self.state]:
            raise BusinessRuleViolation(
                {"status": [f"Cannot move payment from {self.status} to {target.value}"]}
            )

    def start_processing(self, gateway_reference):
        self._assert_can_transition(PaymentState.PROCESSING)
        self.status = PaymentState.PROCESSING.value
        self.gateway_reference = gateway_reference

    def complete(self, gateway_reference=None):
        from campuseats.payment.events import PaymentCompleted

        self._assert_can_transition(PaymentState.COMPLETED)
        now = datetime.now()
        self.status = PaymentState.COMPLETED.value
        self.paid_at = now
        if gateway_reference:
            self.gateway_reference = gateway_reference

        self.raise_(
            PaymentCompleted(
                payment_id=self.id,
                order_id=self.order_id,
                amount=self.amount,
                method=self.method,
                gateway_reference=self.gateway_reference,
                paid_at=now,
            )
        )

    def fail(self, reason):
        from campuseats.payment.events import PaymentFailed

        self._assert_can_transition(PaymentState.FAILED)
        now = datetime.now()
        self.status = PaymentState.FAILED.value
        self.failed_at = now
        self.failure_reason = reason

        self.raise_(PaymentFailed(payment_id=self.id, order_id=self.order_id, reason=reason, failed_at=now))

    def ensure_refundable(self):
        if self.state != PaymentState.COMPLETED:
            raise BusinessRuleViolation({"payment": ["Cannot refund payment that is not completed"]})
        if self.method != PaymentMethod.CARD.value:
            raise BusinessRuleViolation({"payment": ["Only card payments can be refunded"]})

    def refund(self, gateway_refund_reference, reason=None):
        from campuseats.payment.events import PaymentRefunded

        self.ensure_refundable()

        now = datetime.now()
        self.status = PaymentState.REFUNDED.value
        self.gateway_refund_reference = gateway_refund_reference
        self.refund_reason = reason
        self.refunded_at = now

        self.raise_(
            PaymentRefunded(
                payment_id=self.id,
                order_id=self.order_id,
                amount=self.amount,
                gateway_refund_reference=gateway_refund_reference,
                reason=reason,
                refunded_at=now,
            )
        )
