"""Menu management: commands and handler for adding, editing and removing items."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import EntityNotFound
from campuseats.menu.product import Product


@campuseats.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=100)
    description: String(required=True, max_length=500)
    price: Float(required=True)
    category: String(required=True, max_length=20)
    image_url: String(max_length=500)
    allergens: Text()  # JSON list
    dietary_restriction: String(max_length=50)
    is_available: Boolean(default=True)


@campuseats.command(part_of="Product")
class UpdateProduct:
    """Partial update: fields left unset keep their current value."""

    product_id: Identifier(required=True)
    name: String(max_length=100)
    description: String(max_length=500)
    price: Float()
    category: String(max_length=20)
    image_url: String(max_length=500)
    allergens: Text()  # JSON list
    dietary_restriction: String(max_length=50)
    is_available: Boolean()


@campuseats.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def load_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise EntityNotFound.for_entity("Product", product_id) from None


def _allergens(raw):
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else list(raw)


@campuseats.command_handler(part_of=Product)
class ManageMenuHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.add_to_menu(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            image_url=command.image_url,
            allergens=_allergens(command.allergens),
            dietary_restriction=command.dietary_restriction,
            is_available=command.is_available if command.is_available is not None else True,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product added", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = load_product(command.product_id)

        changes = {
            "name": command.name,
            "description": command.description,
            "category": command.category,
            "image_url": command.image_url,
            "allergens": _allergens(command.allergens),
            "dietary_restriction": command.dietary_restriction,
        }
        product.update_details(**{field: value for field, value in changes.items() if value is not None})
        if command.price is not None:
            product.change_price(command.price)
        if command.is_available is not None:
            product.set_availability(command.is_available)

        current_domain.repository_for(Product).add(product)
        logger.info("product updated", product_id=str(product.id))

    @handle(DeleteProduct)
    def delete_product(self, command):
        product = load_product(command.product_id)
        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("product removed", product_id=str(product.id), name=product.name)
