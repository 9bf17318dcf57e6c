"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user
sharing. State tracks ids returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class StudentState:
    """A simulated student with a menu to order from."""

    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)


@dataclass
class OrderState(StudentState):
    """Tracks a single order through the kitchen."""

    order_id: str | None = None
    total_amount: float = 0.0
    current_status: str = "Pending"


@dataclass
class PaymentState(OrderState):
    """Tracks a payment taken against the order."""

    payment_id: str | None = None
