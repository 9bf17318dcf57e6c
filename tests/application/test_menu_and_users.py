"""Application tests for menu management, registration and the order read side."""

import json

import pytest
from protean import current_domain

from campuseats.errors import BusinessRuleViolation, EntityNotFound, NotOrderOwner
from campuseats.menu.management import CreateProduct, DeleteProduct, UpdateProduct
from campuseats.menu.queries import get_menu, get_product
from campuseats.order.queries import get_order, get_user_orders
from campuseats.user.queries import get_user
from campuseats.user.registration import RegisterUser


class TestMenu:
    def test_create_and_read(self):
        product_id = current_domain.process(
            CreateProduct(
                name="Wrap Vegan",
                description="Falafel, hummus and greens",
                price=20.0,
                category="Main",
                allergens=json.dumps(["sesame"]),
                dietary_restriction="Vegan",
            ),
            asynchronous=False,
        )
        product = get_product(product_id)
        assert product["name"] == "Wrap Vegan"
        assert product["allergens"] == ["sesame"]
        assert product["dietary_restriction"] == "Vegan"
        assert product["is_available"] is True

    def test_menu_is_sorted_and_filtered(self, add_product):
        add_product("Pretzel", 7.0, "Snack")
        add_product("Lemonade", 12.0, "Drink")
        add_product("Cappuccino", 10.0, "Drink")
        add_product("Burger Classic", 25.0, "Main", is_available=False)

        assert [p["name"] for p in get_menu()] == ["Cappuccino", "Lemonade", "Burger Classic", "Pretzel"]
        assert [p["name"] for p in get_menu(category="Drink")] == ["Cappuccino", "Lemonade"]
        assert "Burger Classic" not in [p["name"] for p in get_menu(available_only=True)]

    def test_partial_update(self, add_product):
        product_id = add_product("Cappuccino", 10.0, "Drink")
        current_domain.process(UpdateProduct(product_id=product_id, price=11.5, is_available=False), asynchronous=False)
        product = get_product(product_id)
        assert product["price"] == 11.5
        assert product["is_available"] is False
        assert product["name"] == "Cappuccino"

    def test_delete(self, add_product):
        product_id = add_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(EntityNotFound) as exc:
            get_product(product_id)
        assert exc.value.messages["product"] == [f"Product with ID {product_id} not found"]

    def test_update_unknown_product(self):
        with pytest.raises(EntityNotFound):
            current_domain.process(UpdateProduct(product_id="ghost", price=9.0), asynchronous=False)


class TestRegistration:
    def test_register_and_read(self):
        user_id = current_domain.process(
            RegisterUser(email="Maria@Campus.ro", full_name="Maria Ionescu", student_id="S-2041", opening_points=200),
            asynchronous=False,
        )
        user = get_user(user_id)
        assert user["email"] == "maria@campus.ro"
        assert user["role"] == "Student"
        assert user["loyalty_points"] == 200.0

    def test_duplicate_email(self, register_user):
        register_user(email="dup@campus.ro")
        with pytest.raises(BusinessRuleViolation) as exc:
            register_user(email="DUP@campus.ro")
        assert exc.value.messages["email"] == ["Email is already registered"]

    def test_unknown_user(self):
        with pytest.raises(EntityNotFound) as exc:
            get_user("nobody")
        assert exc.value.messages["user"] == ["User with ID nobody not found"]


class TestOrderReadSide:
    def test_owner_sees_order(self, register_user, add_product, place_order):
        user_id = register_user()
        order_id = place_order(user_id, [(add_product(), 2)])
        order = get_order(order_id, requester_id=user_id)
        assert order["total_amount"] == 50.0
        assert order["items"][0]["quantity"] == 2

    def test_other_user_is_refused(self, register_user, add_product, place_order):
        owner = register_user()
        other = register_user()
        order_id = place_order(owner, [(add_product(), 1)])
        with pytest.raises(NotOrderOwner):
            get_order(order_id, requester_id=other)

    def test_user_orders(self, register_user, add_product, place_order):
        user_id = register_user()
        burger = add_product()
        first = place_order(user_id, [(burger, 1)])
        second = place_order(user_id, [(burger, 1)])
        assert {o["order_id"] for o in get_user_orders(user_id)} == {first, second}

    def test_user_orders_for_unknown_user(self):
        with pytest.raises(EntityNotFound):
            get_user_orders("nobody")
