"""Integration tests for the order, kitchen and loyalty endpoints via TestClient."""

from protean import current_domain

from campuseats.user.user import User


def _place(client, user_id, product_id, quantity=1, **extra):
    return client.post(
        "/orders",
        json={"user_id": user_id, "items": [{"product_id": product_id, "quantity": quantity}], **extra},
    )


def _set_status(client, order_id, status, prefix="/kitchen/orders"):
    return client.put(f"{prefix}/{order_id}/status", json={"status": status})


class TestPlaceOrderEndpoint:
    def test_place_order(self, client, student, burger):
        response = _place(client, student, burger, quantity=2, payment_method="Cash", notes="No onions")
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "Pending"
        assert data["payment_status"] == "Pending"
        assert data["total_amount"] == 50.0
        assert data["order_number"].startswith("ORD-")
        assert data["items"][0]["product_name"] == "Burger Classic"

    def test_validation_errors_are_tagged(self, client, student, burger):
        response = _place(client, student, burger, quantity=0)
        assert response.status_code == 400
        assert response.json() == {
            "error": {"kind": "ValidationFailed", "messages": {"items[0]": ["Quantity must be greater than 0"]}}
        }

    def test_unknown_products(self, client, student):
        response = _place(client, student, "ghost")
        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "NotFound"
        assert response.json()["error"]["messages"]["products"] == ["Products not found: ghost"]

    def test_read_order_scoped_to_owner(self, client, student, burger):
        order_id = _place(client, student, burger).json()["order_id"]
        assert client.get(f"/orders/{order_id}", params={"user_id": student}).status_code == 200

        response = client.get(f"/orders/{order_id}", params={"user_id": "someone-else"})
        assert response.status_code == 403
        assert response.json()["error"]["kind"] == "Unauthorized"

    def test_user_orders(self, client, student, burger):
        _place(client, student, burger)
        response = client.get(f"/users/{student}/orders")
        assert response.status_code == 200
        assert len(response.json()) == 1


class TestStatusEndpoints:
    def test_end_to_end_completion_accrues_points(self, client, student):
        platter = client.post(
            "/menu",
            json={"name": "Family Platter", "description": "For sharing", "price": 100.0, "category": "Main"},
        ).json()["product_id"]
        order_id = _place(client, student, platter).json()["order_id"]

        for status in ("Preparing", "Ready", "Completed"):
            response = _set_status(client, order_id, status)
            assert response.status_code == 200
            assert response.json() == {"order_id": order_id, "status": status}

        assert _set_status(client, order_id, "Completed", prefix="/orders").status_code == 200

        balance = client.get(f"/loyalty/{student}").json()
        assert balance["current_points"] == 160.0
        assert balance["total_earned"] == 10.0

        order = client.get(f"/orders/{order_id}").json()
        assert order["loyalty_points_earned"] == 10.0
        assert order["payment_status"] == "Paid"

    def test_invalid_transition_is_conflict(self, client, student, burger):
        order_id = _place(client, student, burger).json()["order_id"]
        response = _set_status(client, order_id, "Completed")
        assert response.status_code == 409
        assert response.json()["error"] == {
            "kind": "InvalidTransition",
            "messages": {"status": ["Invalid status transition from Pending to Completed"]},
        }

    def test_finalized_order(self, client, student, burger):
        order_id = _place(client, student, burger).json()["order_id"]
        client.post(f"/orders/{order_id}/cancel", json={"user_id": student})
        response = _set_status(client, order_id, "Preparing")
        assert response.status_code == 409
        assert response.json()["error"]["kind"] == "Finalized"

    def test_kitchen_queue(self, client, student, burger):
        order_id = _place(client, student, burger).json()["order_id"]
        queue = client.get("/kitchen/orders").json()
        assert [o["order_id"] for o in queue] == [order_id]

    def test_daily_report(self, client, student, burger):
        order_id = _place(client, student, burger, quantity=3).json()["order_id"]
        for status in ("Preparing", "Ready", "Completed"):
            _set_status(client, order_id, status)
        report = client.get("/kitchen/reports/daily").json()
        assert report["total_items_sold"] == 3
        assert report["total_revenue"] == 75.0


class TestCancelEndpoint:
    def test_cancel(self, client, student, burger):
        order_id = _place(client, student, burger).json()["order_id"]
        response = client.post(f"/orders/{order_id}/cancel", json={"user_id": student, "reason": "Late lecture"})
        assert response.status_code == 200
        assert response.json()["status"] == "Cancelled"

    def test_cancel_someone_elses_order(self, client, student, burger):
        order_id = _place(client, student, burger).json()["order_id"]
        response = client.post(f"/orders/{order_id}/cancel", json={"user_id": "intruder"})
        assert response.status_code == 403
        assert response.json()["error"]["messages"]["order"] == ["You are not authorized to cancel this order"]


class TestLoyaltyEndpoints:
    def test_redeem(self, client, student):
        response = client.post("/loyalty/redeem", json={"user_id": student, "points": 100})
        assert response.status_code == 200
        assert response.json() == {
            "points_redeemed": 100,
            "discount_amount": 10.0,
            "remaining_points": 50.0,
            "message": "Successfully redeemed 100 points for 10.00 RON discount!",
        }
        assert current_domain.repository_for(User).get(student).loyalty_points == 50.0

    def test_redeem_insufficient(self, client, student):
        response = client.post("/loyalty/redeem", json={"user_id": student, "points": 200})
        assert response.status_code == 409
        assert response.json()["error"]["messages"]["points"] == ["Insufficient points. You have 150 points."]

    def test_award_and_history(self, client, student):
        response = client.post(
            "/loyalty/award",
            json={"user_id": student, "points": 20, "description": "Hackathon volunteer"},
        )
        assert response.status_code == 201

        history = client.get(f"/loyalty/{student}/transactions", params={"page_size": 1}).json()
        assert [t["description"] for t in history] == ["Hackathon volunteer"]

    def test_bad_page_size(self, client, student):
        response = client.get(f"/loyalty/{student}/transactions", params={"page_size": 500})
        assert response.status_code == 400

    def test_unknown_user(self, client):
        response = client.get("/loyalty/nobody")
        assert response.status_code == 404
        assert response.json()["error"]["messages"]["user"] == ["User with ID nobody not found"]
