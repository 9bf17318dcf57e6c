"""Lookups for users."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from campuseats.errors import EntityNotFound
from campuseats.user.user import User


def load_user(user_id) -> User:
    """Fetch a user, translating a missing row into ``EntityNotFound``."""
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise EntityNotFound.for_entity("User", user_id) from None


def get_user(user_id) -> dict:
    user = load_user(user_id)
    return {
        "user_id": str(user.id),
        "email": user.email,
        "full_name": user.full_name,
        "phone_number": user.phone_number,
        "student_id": user.student_id,
        "role": user.role,
        "loyalty_points": user.loyalty_points,
    }
