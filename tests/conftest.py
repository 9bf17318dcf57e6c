import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def campuseats_bed():
    from campuseats.domain import campuseats

    bed = DomainFixture(campuseats)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session", autouse=True)
def setup_db(campuseats_bed):
    from campuseats.domain import campuseats
    from campuseats.utils.db import drop_db, setup_db

    setup_db(campuseats)

    yield

    drop_db(campuseats)


@pytest.fixture(autouse=True)
def run_around_tests(campuseats_bed):
    """Push the domain context for every test and clean up infrastructure afterwards."""
    with campuseats_bed.domain_context():
        yield

        from protean import current_domain

        from campuseats.payment.gateway import reset_gateway

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        current_domain.event_store.store._data_reset()
        reset_gateway()


# ---------------------------------------------------------------------------
# Shared data fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def register_user():
    """Factory: register a user and return the new user id."""
    from protean import current_domain

    from campuseats.user.registration import RegisterUser

    counter = {"n": 0}

    def _register(email=None, full_name="Alex Popescu", role="Student", opening_points=0.0, **extra):
        counter["n"] += 1
        return current_domain.process(
            RegisterUser(
                email=email or f"student{counter['n']}@campus.ro",
                full_name=full_name,
                role=role,
                opening_points=opening_points,
                **extra,
            ),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def add_product():
    """Factory: put a product on the menu and return its id."""
    from protean import current_domain

    from campuseats.menu.management import CreateProduct

    def _add(name="Burger Classic", price=25.0, category="Main", is_available=True, **extra):
        return current_domain.process(
            CreateProduct(
                name=name,
                description=extra.pop("description", f"{name} from the campus kitchen"),
                price=price,
                category=category,
                is_available=is_available,
                **extra,
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def place_order():
    """Factory: place an order for ``items`` (list of (product_id, quantity)) and return its id."""
    import json

    from protean import current_domain

    from campuseats.order.placement import PlaceOrder

    def _place(user_id, items, payment_method=None, notes=None):
        return current_domain.process(
            PlaceOrder(
                user_id=user_id,
                items=json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in items]),
                payment_method=payment_method,
                notes=notes,
            ),
            asynchronous=False,
        )

    return _place


@pytest.fixture()
def advance_order():
    """Factory: walk an order through the kitchen statuses up to ``target``."""
    from protean import current_domain

    from campuseats.order.status import UpdateOrderStatus

    path = ["Preparing", "Ready", "Completed"]

    def _advance(order_id, target):
        for status in path[: path.index(target) + 1]:
            current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)

    return _advance
