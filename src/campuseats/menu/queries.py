"""Read-side helpers for the menu."""

from protean.utils.globals import current_domain

from campuseats.menu.management import load_product
from campuseats.menu.product import Product


def product_view(product: Product) -> dict:
    return {
        "product_id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "category": product.category,
        "image_url": product.image_url,
        "allergens": product.allergen_list,
        "dietary_restriction": product.dietary_restriction,
        "is_available": product.is_available,
    }


def get_menu(category: str | None = None, available_only: bool = False) -> list[dict]:
    """List menu items ordered by category then name."""
    query = current_domain.repository_for(Product)._dao.query
    if category:
        query = query.filter(category=category)
    if available_only:
        query = query.filter(is_available=True)

    products = sorted(query.all().items, key=lambda p: (p.category, p.name))
    return [product_view(p) for p in products]


def get_product(product_id) -> dict:
    return product_view(load_product(product_id))
