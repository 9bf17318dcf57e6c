import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from campuseats.api import ROUTERS, register_error_handlers, request_context_middleware


@pytest.fixture()
def client():
    app = FastAPI()
    app.middleware("http")(request_context_middleware)
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def student(client):
    response = client.post(
        "/users",
        json={"email": "student1@campus.ro", "full_name": "Alex Popescu", "opening_points": 150},
    )
    assert response.status_code == 201
    return response.json()["user_id"]


@pytest.fixture()
def burger(client):
    response = client.post(
        "/menu",
        json={"name": "Burger Classic", "description": "Beef burger", "price": 25.0, "category": "Main"},
    )
    assert response.status_code == 201
    return response.json()["product_id"]
