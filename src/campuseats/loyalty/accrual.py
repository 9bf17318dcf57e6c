"""Crediting points when an order completes.

Called from the order status handler inside its unit of work, so the order
write and the user's ledger write commit (or roll back) together.
"""

from protean.utils.globals import current_domain

from campuseats.domain import logger
from campuseats.user.queries import load_user
from campuseats.user.user import User


def accrue_points(user_id, points, description, order_id):
    user = load_user(user_id)
    entry = user.earn_points(points, description, order_id=order_id)
    current_domain.repository_for(User).add(user)
    logger.info(
        "points accrued",
        user_id=str(user_id),
        order_id=str(order_id),
        points=entry.points_change,
        balance=user.loyalty_points,
    )
    return entry
