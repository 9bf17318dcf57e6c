"""Loading payments by id."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from campuseats.errors import EntityNotFound
from campuseats.payment.payment import Payment


def load_payment(payment_id) -> Payment:
    try:
        return current_domain.repository_for(Payment).get(payment_id)
    except ObjectNotFoundError:
        raise EntityNotFound.for_entity("Payment", payment_id) from None
