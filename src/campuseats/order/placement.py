"""Order placement: command and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import BusinessRuleViolation, EntityNotFound, InputInvalid
from campuseats.menu.product import Product
from campuseats.order.numbering import allocate_order_number
from campuseats.order.order import ORDER_PAYMENT_METHODS, Order
from campuseats.user.queries import load_user

MAX_QUANTITY = 10


@campuseats.command(part_of="Order")
class PlaceOrder:
    user_id: Identifier(required=True)
    items: Text(required=True)  # JSON: list of {product_id, quantity, special_instructions}
    payment_method: String(max_length=20)
    notes: String(max_length=1000)


def _parse_items(raw) -> list:
    malformed = InputInvalid({"items": ["Items must be a JSON list of order lines"]})
    try:
        items = json.loads(raw) if isinstance(raw, str) else raw
    except ValueError:
        raise malformed from None
    if items is None:
        return []
    if not isinstance(items, list):
        raise malformed
    return items


def validate_order_request(items, payment_method) -> None:
    """Collect every input problem and raise them together."""
    errors: dict[str, list[str]] = {}

    if not items:
        errors.setdefault("items", []).append("Order must contain at least one item")

    for index, item in enumerate(items):
        field = f"items[{index}]"
        if not isinstance(item, dict):
            errors.setdefault(field, []).append("Item must be an object with product_id and quantity")
            continue
        if not item.get("product_id"):
            errors.setdefault(field, []).append("Product ID is required")
        quantity = item.get("quantity")
        if isinstance(quantity, (bool, float, str)):
            errors.setdefault(field, []).append("Quantity must be a whole number")
        elif not isinstance(quantity, int) or quantity <= 0:
            errors.setdefault(field, []).append("Quantity must be greater than 0")
        elif quantity > MAX_QUANTITY:
            errors.setdefault(field, []).append(f"Maximum quantity per item is {MAX_QUANTITY}")

    allowed = [method.value for method in ORDER_PAYMENT_METHODS]
    if payment_method and payment_method not in allowed:
        errors.setdefault("payment_method", []).append(f"Payment method must be one of: {', '.join(allowed)}")

    if errors:
        raise InputInvalid(errors)


def _load_products(product_ids) -> dict:
    repo = current_domain.repository_for(Product)
    products = {}
    missing = []
    for product_id in product_ids:
        try:
            products[product_id] = repo.get(product_id)
        except ObjectNotFoundError:
            missing.append(product_id)

    if missing:
        raise EntityNotFound({"products": [f"Products not found: {', '.join(missing)}"]})

    unavailable = [p.name for p in products.values() if not p.is_available]
    if unavailable:
        raise BusinessRuleViolation({"products": [f"Products not available: {', '.join(unavailable)}"]})

    return products


@campuseats.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = _parse_items(command.items)
        validate_order_request(items, command.payment_method)

        user = load_user(command.user_id)
        product_ids = list(dict.fromkeys(str(item["product_id"]) for item in items))
        products = _load_products(product_ids)

        lines_data = []
        for item in items:
            product = products[str(item["product_id"])]
            lines_data.append(
                {
                    "product_id": str(product.id),
                    "product_name": product.name,
                    "quantity": item["quantity"],
                    "unit_price": product.price,
                    "special_instructions": item.get("special_instructions"),
                }
            )

        order = Order.place(
            order_number=allocate_order_number(),
            user_id=str(user.id),
            lines_data=lines_data,
            payment_method=command.payment_method or None,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(user.id),
            total_amount=order.total_amount,
        )
        return str(order.id)
