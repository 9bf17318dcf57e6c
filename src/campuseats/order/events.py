"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from campuseats.domain import campuseats


@campuseats.event(part_of="Order")
class OrderPlaced:
    """A student placed an order; it waits in the kitchen queue as Pending."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    user_id: Identifier(required=True)
    line_count: Integer(required=True)
    total_amount: Float(required=True)
    payment_method: String()
    placed_at: DateTime(required=True)


@campuseats.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@campuseats.event(part_of="Order")
class OrderCompleted:
    """The order was handed over to the student."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    total_amount: Float(required=True)
    completed_at: DateTime(required=True)


@campuseats.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    previous_status: String(required=True)
    reason: String()
    cancelled_at: DateTime(required=True)


@campuseats.event(part_of="Order")
class OrderPaymentStatusChanged:
    """The payment axis of the order moved, e.g. Pending to Paid."""

    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
