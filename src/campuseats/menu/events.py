"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from campuseats.domain import campuseats


@campuseats.event(part_of="Product")
class ProductAdded:
    """A new item was put on the menu."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    is_available: Boolean(required=True)
    created_at: DateTime(required=True)


@campuseats.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive fields of a menu item were changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    description: String()


@campuseats.event(part_of="Product")
class ProductPriceChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)


@campuseats.event(part_of="Product")
class ProductAvailabilityChanged:
    """A menu item was switched on or off for ordering."""

    __version__ = 1

    product_id: Identifier(required=True)
    is_available: Boolean(required=True)

