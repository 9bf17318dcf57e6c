"""Loading orders by id."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from campuseats.errors import EntityNotFound
from campuseats.order.order import Order


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise EntityNotFound.for_entity("Order", order_id) from None
