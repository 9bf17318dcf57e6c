"""Domain events for the Payment aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from campuseats.domain import campuseats


@campuseats.event(part_of="Payment")
class PaymentInitiated:
    """A payment attempt was recorded against an order."""

    __version__ = 1

    payment_id: Identifier(required=True)
    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    amount: Float(required=True)
    method: String(required=True)
    initiated_at: DateTime(required=True)


@campuseats.event(part_of="Payment")
class PaymentCompleted:
    __version__ = 1

    payment_id: Identifier(required=True)
    order_id: Identifier(required=True)
    amount: Float(required=True)
    method: String(required=True)
    gateway_reference: String()
    paid_at: DateTime(required=True)


@campuseats.event(part_of="Payment")
class PaymentFailed:
    __version__ = 1

    payment_id: Identifier(required=True)
    order_id: Identifier(required=True)
    reason: String(required=True)
    failed_at: DateTime(required=True)


@campuseats.event(part_of="Payment")
class PaymentRefunded:
    """A completed card payment was returned to the customer."""

    __version__ = 1

    payment_id: Identifier(required=True)
    order_id: Identifier(required=True)
    amount: Float(required=True)
    gateway_refund_reference: String()
    reason: String()
    refunded_at: DateTime(required=True)
