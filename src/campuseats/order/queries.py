"""Read-side helpers for orders."""

from protean.utils.globals import current_domain

from campuseats.errors import NotOrderOwner
from campuseats.order.lookup import load_order
from campuseats.order.order import Order
from campuseats.user.queries import load_user


def order_view(order: Order) -> dict:
    return {
        "order_id": str(order.id),
        "order_number": order.order_number,
        "user_id": str(order.user_id),
        "status": order.status,
        "payment_status": order.payment_status,
        "payment_method": order.payment_method,
        "total_amount": order.total_amount,
        "notes": order.notes,
        "loyalty_points_earned": order.loyalty_points_earned,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "completed_at": order.completed_at,
        "items": [
            {
                "line_id": str(line.id),
                "product_id": str(line.product_id),
                "product_name": line.product_name,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "subtotal": line.subtotal,
                "special_instructions": line.special_instructions,
            }
            for line in order.lines
        ],
    }


def get_order(order_id, requester_id=None) -> dict:
    """Fetch one order; with ``requester_id`` only the owner may see it."""
    order = load_order(order_id)
    if requester_id is not None and str(order.user_id) != str(requester_id):
        raise NotOrderOwner({"order": ["You are not authorized to view this order"]})
    return order_view(order)


def get_user_orders(user_id) -> list[dict]:
    """A user's orders, newest first."""
    load_user(user_id)
    return [order_view(o) for o in current_domain.repository_for(Order).for_user(user_id)]
