"""Product aggregate: a single item on the campus menu."""

import json
from datetime import datetime
from enum import Enum
from urllib.parse import urlparse

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text

from campuseats.domain import campuseats

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class ProductCategory(Enum):
    MAIN = "Main"
    DRINK = "Drink"
    DESSERT = "Dessert"
    SNACK = "Snack"


@campuseats.aggregate
class Product:
    """A menu item that students can order.

    Orders copy the name and price of a product into their lines when they are
    placed, so later edits (or removal) never change historical orders.
    """

    name: String(required=True, max_length=100)
    description: String(required=True, max_length=500)
    price: Float(required=True, min_value=0.01, max_value=1000.0)
    category: String(required=True, choices=ProductCategory)
    image_url: String(max_length=500)
    allergens: Text()  # JSON list of allergen names
    dietary_restriction: String(max_length=50)
    is_available: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def image_url_must_be_absolute(self):
        if not self.image_url:
            return
        parsed = urlparse(self.image_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValidationError({"image_url": ["Invalid image URL format"]})

    @property
    def allergen_list(self) -> list[str]:
        return json.loads(self.allergens) if self.allergens else []

    @classmethod
    def add_to_menu(
        cls,
        name,
        description,
        price,
        category,
        image_url=None,
        allergens=None,
        dietary_restriction=None,
        is_available=True,
    ):
        from campuseats.menu.events import ProductAdded

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            price=price,
            category=category,
            image_url=image_url,
            allergens=json.dumps(list(allergens or [])),
            dietary_restriction=dietary_restriction,
            is_available=is_available,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=product.name,
                category=product.category,
                price=product.price,
                is_available=product.is_available,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        category=_UNSET,
        image_url=_UNSET,
        allergens=_UNSET,
        dietary_restriction=_UNSET,
    ):
        from campuseats.menu.events import ProductDetailsUpdated

        if name is not _UNSET:
            self.name = name
        if description is not _UNSET:
            self.description = description
        if category is not _UNSET:
            self.category = category
        if image_url is not _UNSET:
            self.image_url = image_url
        if allergens is not _UNSET:
            self.allergens = json.dumps(list(allergens or []))
        if dietary_restriction is not _UNSET:
            self.dietary_restriction = dietary_restriction

        self.updated_at = datetime.now()
        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                category=self.category,
                description=self.description,
            )
        )

    def change_price(self, new_price):
        from campuseats.menu.events import ProductPriceChanged

        previous_price = self.price
        if previous_price == new_price:
            return

        self.price = new_price
        self.updated_at = datetime.now()
        self.raise_(
            ProductPriceChanged(
                product_id=self.id,
                previous_price=previous_price,
                new_price=new_price,
            )
        )

    def set_availability(self, is_available):
        from campuseats.menu.events import ProductAvailabilityChanged

        if self.is_available == is_available:
            return

        self.is_available = is_available
        self.updated_at = datetime.now()
        self.raise_(ProductAvailabilityChanged(product_id=self.id, is_available=is_available))

