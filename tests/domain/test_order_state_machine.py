"""Tests for the Order state machine: valid transitions, guards and side effects."""

import pytest

from campuseats.errors import ErrorKind, InvalidTransition, OrderFinalized
from campuseats.order.events import OrderCancelled, OrderCompleted, OrderPlaced, OrderStatusChanged
from campuseats.order.order import Order, OrderStatus, PaymentStatus

_PATH = [OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.COMPLETED]


def _make_order(notes=None):
    return Order.place(
        order_number="ORD-20261019-1234",
        user_id="user-001",
        lines_data=[
            {"product_id": "prod-001", "product_name": "Burger Classic", "quantity": 2, "unit_price": 25.0},
            {"product_id": "prod-002", "product_name": "Cappuccino", "quantity": 1, "unit_price": 10.0},
        ],
        payment_method="Card",
        notes=notes,
    )


def _order_at(status):
    order = _make_order()
    if status == OrderStatus.CANCELLED:
        order.change_status(OrderStatus.CANCELLED)
    elif status != OrderStatus.PENDING:
        for step in _PATH[: _PATH.index(status) + 1]:
            order.change_status(step)
    order._events.clear()
    return order


class TestPlacement:
    def test_new_order_is_pending_with_snapshot_lines(self):
        order = _make_order()
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PENDING.value
        assert len(order.lines) == 2
        assert order.total_amount == 60.0
        assert {line.subtotal for line in order.lines} == {50.0, 10.0}
        assert order.loyalty_accrued is False

    def test_placement_raises_order_placed(self):
        order = _make_order()
        placed = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert len(placed) == 1
        assert placed[0].total_amount == 60.0
        assert placed[0].line_count == 2


class TestValidTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.PREPARING),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.PREPARING, OrderStatus.READY),
            (OrderStatus.PREPARING, OrderStatus.CANCELLED),
            (OrderStatus.READY, OrderStatus.COMPLETED),
            (OrderStatus.READY, OrderStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        order = _order_at(current)
        assert order.change_status(target) is True
        assert order.status == target.value
        changed = [e for e in order._events if isinstance(e, OrderStatusChanged)]
        assert changed[-1].previous_status == current.value
        assert changed[-1].new_status == target.value


class TestInvalidTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.READY),
            (OrderStatus.PENDING, OrderStatus.COMPLETED),
            (OrderStatus.PREPARING, OrderStatus.PENDING),
            (OrderStatus.PREPARING, OrderStatus.COMPLETED),
            (OrderStatus.READY, OrderStatus.PENDING),
            (OrderStatus.READY, OrderStatus.PREPARING),
        ],
    )
    def test_rejected(self, current, target):
        order = _order_at(current)
        with pytest.raises(InvalidTransition) as exc:
            order.change_status(target)
        assert exc.value.kind == ErrorKind.INVALID_TRANSITION
        assert exc.value.messages["status"] == [f"Invalid status transition from {current.value} to {target.value}"]
        assert order.status == current.value

    @pytest.mark.parametrize("final", [OrderStatus.COMPLETED, OrderStatus.CANCELLED])
    @pytest.mark.parametrize("target", [OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY])
    def test_finalized_orders_never_move(self, final, target):
        order = _order_at(final)
        with pytest.raises(OrderFinalized) as exc:
            order.change_status(target)
        assert exc.value.kind == ErrorKind.FINALIZED
        assert exc.value.messages["status"] == [f"Cannot change status of {final.value.lower()} order"]

    def test_completed_cannot_be_cancelled(self):
        order = _order_at(OrderStatus.COMPLETED)
        with pytest.raises(OrderFinalized):
            order.change_status(OrderStatus.CANCELLED)

    def test_unknown_status_name(self):
        order = _make_order()
        with pytest.raises(ValueError):
            order.change_status("Shipped")


class TestSameStatus:
    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_same_status_is_a_no_op(self, status):
        order = _order_at(status)
        before = order.updated_at
        assert order.change_status(status) is False
        assert order.status == status.value
        assert order.updated_at == before
        assert order._events == []


class TestCompletion:
    def test_completion_stamps_time_and_marks_paid(self):
        order = _order_at(OrderStatus.READY)
        order.change_status(OrderStatus.COMPLETED)
        assert order.completed_at is not None
        assert order.payment_status == PaymentStatus.PAID.value
        assert order.awaiting_accrual is True
        assert any(isinstance(e, OrderCompleted) for e in order._events)

    def test_recorded_accrual_is_no_longer_awaited(self):
        order = _order_at(OrderStatus.COMPLETED)
        order.record_accrual(6.0)
        assert order.loyalty_points_earned == 6.0
        assert order.awaiting_accrual is False


class TestCancellation:
    def test_cancellation_refunds_and_keeps_completed_at_empty(self):
        order = _order_at(OrderStatus.PREPARING)
        order.change_status(OrderStatus.CANCELLED, reason="Changed my mind")
        assert order.payment_status == PaymentStatus.REFUNDED.value
        assert order.completed_at is None
        assert order.notes == "Cancelled: Changed my mind"
        cancelled = [e for e in order._events if isinstance(e, OrderCancelled)]
        assert cancelled[0].previous_status == OrderStatus.PREPARING.value

    def test_reason_is_appended_to_existing_notes(self):
        order = _make_order(notes="No onions")
        order.change_status(OrderStatus.CANCELLED, reason="Too slow")
        assert order.notes == "No onions\nCancelled: Too slow"

    def test_without_reason_notes_are_untouched(self):
        order = _make_order(notes="No onions")
        order.change_status(OrderStatus.CANCELLED)
        assert order.notes == "No onions"
