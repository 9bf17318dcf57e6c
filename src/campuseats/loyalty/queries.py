"""Balance and history views over a user's ledger."""

from campuseats.errors import InputInvalid
from campuseats.loyalty.policy import DEFAULT_PAGE_SIZE, MAXIMUM_PAGE_SIZE, POINT_VALUE
from campuseats.user.queries import load_user
from campuseats.utils import money


def get_balance(user_id) -> dict:
    """Current points plus lifetime totals derived from the ledger."""
    user = load_user(user_id)
    return {
        "user_id": str(user.id),
        "current_points": user.loyalty_points,
        "total_earned": user.total_earned,
        "total_redeemed": user.total_redeemed,
        "points_value": money.multiply(user.loyalty_points, POINT_VALUE),
    }


def get_transactions(user_id, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> list[dict]:
    """One page of ledger entries, newest first."""
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be at least 1"]
    if not 1 <= page_size <= MAXIMUM_PAGE_SIZE:
        errors["page_size"] = [f"Page size must be between 1 and {MAXIMUM_PAGE_SIZE}"]
    if errors:
        raise InputInvalid(errors)

    user = load_user(user_id)
    start = (page - 1) * page_size
    return [
        {
            "transaction_id": str(entry.id),
            "points_change": entry.points_change,
            "kind": entry.kind,
            "description": entry.description,
            "order_id": str(entry.order_id) if entry.order_id else None,
            "created_at": entry.created_at,
        }
        for entry in user.ledger[start : start + page_size]
    ]
