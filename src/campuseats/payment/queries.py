"""Read-side helpers for payments."""

from protean.utils.globals import current_domain

from campuseats.errors import InputInvalid
from campuseats.loyalty.policy import DEFAULT_PAGE_SIZE, MAXIMUM_PAGE_SIZE
from campuseats.order.lookup import load_order
from campuseats.order.order import PaymentMethod
from campuseats.payment.lookup import load_payment
from campuseats.payment.payment import Payment, PaymentState
from campuseats.user.queries import load_user


def payment_view(payment: Payment) -> dict:
    return {
        "payment_id": str(payment.id),
        "order_id": str(payment.order_id),
        "user_id": str(payment.user_id),
        "amount": payment.amount,
        "method": payment.method,
        "status": payment.status,
        "gateway_reference": payment.gateway_reference,
        "gateway_refund_reference": payment.gateway_refund_reference,
        "loyalty_points_used": payment.loyalty_points_used,
        "failure_reason": payment.failure_reason,
        "refund_reason": payment.refund_reason,
        "created_at": payment.created_at,
        "paid_at": payment.paid_at,
        "failed_at": payment.failed_at,
        "refunded_at": payment.refunded_at,
    }


def _payments(**criteria) -> list[dict]:
    query = current_domain.repository_for(Payment)._dao.query.limit(None)
    if criteria:
        query = query.filter(**criteria)
    payments = query.all().items
    return [payment_view(p) for p in sorted(payments, key=lambda p: p.created_at, reverse=True)]


def get_order_payments(order_id) -> list[dict]:
    order = load_order(order_id)
    return _payments(order_id=str(order.id))


def get_user_payments(user_id) -> list[dict]:
    user = load_user(user_id)
    return _payments(user_id=str(user.id))


def get_payment(payment_id) -> dict:
    return payment_view(load_payment(payment_id))


def _parse_filter(field: str, value, choices, errors: dict) -> str | None:
    """Match a filter value to its canonical enum value, ignoring case."""
    if value is None or not str(value).strip():
        return None
    for choice in choices:
        if choice.value.lower() == str(value).strip().lower():
            return choice.value
    allowed = ", ".join(c.value for c in choices)
    errors[field] = [f"{field.capitalize()} must be one of: {allowed}"]
    return None


def get_all_payments(status=None, method=None, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> dict:
    """Staff listing of every payment, newest first, optionally filtered by status and method."""
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be at least 1"]
    if not 1 <= page_size <= MAXIMUM_PAGE_SIZE:
        errors["page_size"] = [f"Page size must be between 1 and {MAXIMUM_PAGE_SIZE}"]
    criteria = {
        "status": _parse_filter("status", status, list(PaymentState), errors),
        "method": _parse_filter("method", method, list(PaymentMethod), errors),
    }
    if errors:
        raise InputInvalid(errors)

    matching = _payments(**{key: value for key, value in criteria.items() if value is not None})
    start = (page - 1) * page_size
    return {
        "items": matching[start : start + page_size],
        "page": page,
        "page_size": page_size,
        "total_count": len(matching),
    }
