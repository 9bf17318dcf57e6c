"""Repository for the Order aggregate."""

from campuseats.domain import campuseats
from campuseats.order.order import Order


@campuseats.repository(part_of=Order)
class OrderRepository:
    def number_taken(self, order_number: str) -> bool:
        return bool(self._dao.query.filter(order_number=order_number).all().items)

    def for_user(self, user_id) -> list[Order]:
        orders = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(orders, key=lambda o: o.created_at, reverse=True)
