"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(email format, E.164 phone numbers, price bounds, quantity limits) and match
the field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["Main", "Drink", "Dessert", "Snack"]

_DISHES = {
    "Main": ["Burger", "Pizza", "Wrap", "Pasta", "Salad Bowl", "Schnitzel"],
    "Drink": ["Cappuccino", "Lemonade", "Iced Tea", "Smoothie", "Espresso"],
    "Dessert": ["Cheesecake", "Papanasi", "Brownie", "Tiramisu"],
    "Snack": ["Pretzel", "Covrig", "Fries", "Nachos"],
}

_ALLERGENS = ["gluten", "lactose", "nuts", "eggs", "soy", "sesame"]


# ---------- Users ----------


def valid_email() -> str:
    """Unique campus email: one @, no spaces, dotted domain."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@campus.ro"


def valid_phone() -> str:
    """Romanian mobile number in E.164 form."""
    return f"+407{random.randint(10_000_000, 99_999_999)}"


def user_data(opening_points: float = 0.0) -> dict:
    """RegisterUserRequest payload."""
    return {
        "email": valid_email(),
        "full_name": fake.name()[:100],
        "phone_number": valid_phone(),
        "student_id": f"S-{random.randint(10_000, 99_999)}",
        "role": "Student",
        "opening_points": opening_points,
    }


# ---------- Menu ----------


def product_data(category: str | None = None) -> dict:
    """CreateProductRequest payload priced within menu bounds."""
    category = category or random.choice(CATEGORIES)
    dish = random.choice(_DISHES[category])
    return {
        "name": f"{dish} {fake.color_name()}"[:100],
        "description": fake.sentence(nb_words=8)[:500],
        "price": round(random.uniform(5.0, 45.0), 2),
        "category": category,
        "allergens": random.sample(_ALLERGENS, k=random.randint(0, 2)),
        "is_available": True,
    }


# ---------- Orders ----------


def order_data(user_id: str, product_ids: list[str], payment_method: str | None = None) -> dict:
    """PlaceOrderRequest payload with one to three distinct products."""
    picked = random.sample(product_ids, k=min(len(product_ids), random.randint(1, 3)))
    return {
        "user_id": user_id,
        "items": [
            {
                "product_id": product_id,
                "quantity": random.randint(1, 3),
                "special_instructions": random.choice([None, "No onions", "Extra sauce", "To go"]),
            }
            for product_id in picked
        ],
        "payment_method": payment_method or random.choice(["Card", "Cash"]),
        "notes": random.choice([None, fake.sentence(nb_words=5)]),
    }


def cancellation_reason() -> str:
    return random.choice(["Lecture ran late", "Ordered by mistake", "Found a friend to eat with"])


# ---------- Loyalty ----------


def redemption_points(balance: float) -> int:
    """A redeemable amount: at least the 50-point floor, at most the balance."""
    return random.randint(50, max(50, int(balance)))


def award_data(user_id: str) -> dict:
    return {
        "user_id": user_id,
        "points": round(random.uniform(5, 50), 2),
        "description": random.choice(["Campus survey bonus", "Volunteer shift", "Birthday treat"]),
    }
