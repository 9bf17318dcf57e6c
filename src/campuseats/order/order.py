"""Order aggregate: the core of the order lifecycle.

State Machine:
    PENDING → PREPARING → READY → COMPLETED
    PENDING/PREPARING/READY → CANCELLED
    COMPLETED and CANCELLED are terminal.

Payment status moves on its own axis (Pending, Paid, Failed, Refunded):
completion forces a still-pending payment to Paid, cancellation marks it
Refunded, and payments settle it to Paid once they cover the total.
"""

from datetime import datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from campuseats.domain import campuseats
from campuseats.errors import InvalidTransition, OrderFinalized
from campuseats.utils import money


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PREPARING = "Preparing"
    READY = "Ready"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class PaymentMethod(Enum):
    CARD = "Card"
    CASH = "Cash"
    LOYALTY_POINTS = "LoyaltyPoints"
    MIXED = "Mixed"


# Payment methods a student may pick when placing an order
ORDER_PAYMENT_METHODS = (PaymentMethod.CARD, PaymentMethod.CASH, PaymentMethod.LOYALTY_POINTS)

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

FINAL_STATES = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}

# States the kitchen still has to work on
ACTIVE_STATES = (OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY)


def parse_status(value) -> OrderStatus:
    """Map a status name onto ``OrderStatus``; raises ValueError for unknown names."""
    if isinstance(value, OrderStatus):
        return value
    return OrderStatus(value)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@campuseats.entity(part_of="Order")
class OrderLine:
    """One product on an order, with its name and price frozen at placement."""

    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=100)
    quantity: Integer(required=True, min_value=1, max_value=10)
    unit_price: Float(required=True, min_value=0.0)
    subtotal: Float(required=True, min_value=0.0)
    special_instructions: String(max_length=500)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@campuseats.aggregate
class Order:
    order_number: String(required=True, max_length=30, unique=True)
    user_id: Identifier(required=True)
    lines: HasMany(OrderLine)
    total_amount: Float(default=0.0)
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status: String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_method: String(choices=PaymentMethod)
    notes: Text()
    loyalty_points_earned: Float(default=0.0)
    loyalty_accrued: Boolean(default=False)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime()
    completed_at: DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, order_number, user_id, lines_data, payment_method=None, notes=None):
        """Create a Pending order.

        Args:
            order_number: Pre-allocated unique number (``ORD-yyyyMMdd-NNNN``).
            user_id: The student placing the order.
            lines_data: List of dicts with product_id, product_name, quantity,
                        unit_price and optional special_instructions.
        """
        from campuseats.order.events import OrderPlaced

        now = datetime.now()
        lines = [
            OrderLine(
                product_id=data["product_id"],
                product_name=data["product_name"],
                quantity=data["quantity"],
                unit_price=data["unit_price"],
                subtotal=money.multiply(data["unit_price"], data["quantity"]),
                special_instructions=data.get("special_instructions"),
            )
            for data in lines_data
        ]

        order = cls(
            order_number=order_number,
            user_id=user_id,
            lines=lines,
            total_amount=money.total(line.subtotal for line in lines),
            payment_method=payment_method,
            notes=notes,
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                order_number=order_number,
                user_id=user_id,
                line_count=len(lines),
                total_amount=order.total_amount,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status workflow
    # -------------------------------------------------------------------
    @property
    def current_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    @property
    def is_finalized(self) -> bool:
        return self.current_status in FINAL_STATES

    @property
    def awaiting_accrual(self) -> bool:
        return self.current_status == OrderStatus.COMPLETED and not self.loyalty_accrued

    def change_status(self, target, reason=None) -> bool:
        """Move the order to ``target``.

        Returns False for a same-status request, which changes nothing.
        """
        from campuseats.order.events import OrderStatusChanged

        target = parse_status(target)
        current = self.current_status

        if target == current:
            return False

        if current in FINAL_STATES:
            raise OrderFinalized({"status": [f"Cannot change status of {current.value.lower()} order"]})

        if target not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(current.value, target.value)

        now = datetime.now()
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.COMPLETED:
            self._complete(now)
        elif target == OrderStatus.CANCELLED:
            self._cancel(current, reason, now)

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )
        return True

    def _complete(self, now):
        from campuseats.order.events import OrderCompleted

        self.completed_at = now
        if self.payment_status == PaymentStatus.PENDING.value:
            self.set_payment_status(PaymentStatus.PAID)

        self.raise_(
            OrderCompleted(
                order_id=self.id,
                user_id=self.user_id,
                total_amount=self.total_amount,
                completed_at=now,
            )
        )

    def _cancel(self, previous, reason, now):
        from campuseats.order.events import OrderCancelled

        self.set_payment_status(PaymentStatus.REFUNDED)
        if reason:
            self.notes = f"{self.notes}\nCancelled: {reason}" if self.notes else f"Cancelled: {reason}"

        self.raise_(
            OrderCancelled(
                order_id=self.id,
                user_id=self.user_id,
                previous_status=previous.value,
                reason=reason,
                cancelled_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Payment axis and loyalty bookkeeping
    # -------------------------------------------------------------------
    def set_payment_status(self, status):
        from campuseats.order.events import OrderPaymentStatusChanged

        status = PaymentStatus(status)
        previous = self.payment_status
        if previous == status.value:
            return

        self.payment_status = status.value
        self.updated_at = datetime.now()
        self.raise_(
            OrderPaymentStatusChanged(
                order_id=self.id,
                previous_status=previous,
                new_status=status.value,
            )
        )

    def record_accrual(self, points):
        self.loyalty_points_earned = points
        self.loyalty_accrued = True
