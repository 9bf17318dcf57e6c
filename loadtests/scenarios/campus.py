"""CampusEats load test scenarios.

Stateful SequentialTaskSet journeys: the full kitchen lifecycle with
loyalty accrual, a student cancellation, point redemption, and card
payments with refunds.
"""

from locust import SequentialTaskSet, task

from loadtests.data_generators import (
    award_data,
    cancellation_reason,
    order_data,
    product_data,
    redemption_points,
    user_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import OrderState, PaymentState, StudentState


class _StudentJourney(SequentialTaskSet):
    """Registers a student and stocks a small menu before the journey starts."""

    state_class = StudentState
    opening_points = 0.0

    def on_start(self):
        self.state = self.state_class()
        with self.client.post(
            "/users",
            json=user_data(self.opening_points),
            catch_response=True,
            name="POST /users",
        ) as resp:
            if resp.status_code == 201:
                self.state.user_id = resp.json()["user_id"]
            else:
                resp.failure(f"Register user failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

        for category in ("Main", "Drink"):
            with self.client.post(
                "/menu",
                json=product_data(category),
                catch_response=True,
                name="POST /menu",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code}: {extract_error_detail(resp)}")
                    self.interrupt()

    def _place_order(self, payment_method=None):
        with self.client.post(
            "/orders",
            json=order_data(self.state.user_id, self.state.product_ids, payment_method),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_id = body["order_id"]
                self.state.total_amount = body["total_amount"]
            else:
                resp.failure(f"Place order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    def _move_to(self, status):
        with self.client.put(
            f"/kitchen/orders/{self.state.order_id}/status",
            json={"status": status},
            catch_response=True,
            name="PUT /kitchen/orders/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = status
            else:
                resp.failure(f"Move to {status} failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()


class OrderLifecycleJourney(_StudentJourney):
    """Place -> Preparing -> Ready -> Completed -> check loyalty balance.

    The happy path through the kitchen, ending with the accrual credit.
    """

    state_class = OrderState

    @task
    def place_order(self):
        self._place_order()

    @task
    def browse_kitchen_queue(self):
        self.client.get("/kitchen/orders", name="GET /kitchen/orders")

    @task
    def preparing(self):
        self._move_to("Preparing")

    @task
    def ready(self):
        self._move_to("Ready")

    @task
    def completed(self):
        self._move_to("Completed")

    @task
    def check_balance(self):
        with self.client.get(
            f"/loyalty/{self.state.user_id}",
            catch_response=True,
            name="GET /loyalty/{user_id}",
        ) as resp:
            if resp.status_code != 200 or resp.json()["total_earned"] <= 0:
                resp.failure(f"No points accrued: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderCancellationJourney(_StudentJourney):
    """Place -> Preparing -> student cancels."""

    state_class = OrderState

    @task
    def place_order(self):
        self._place_order()

    @task
    def preparing(self):
        self._move_to("Preparing")

    @task
    def cancel(self):
        with self.client.post(
            f"/orders/{self.state.order_id}/cancel",
            json={"user_id": self.state.user_id, "reason": cancellation_reason()},
            catch_response=True,
            name="POST /orders/{id}/cancel",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cancel failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class LoyaltyRedemptionJourney(_StudentJourney):
    """Award points -> redeem -> read paged history."""

    opening_points = 120.0

    @task
    def award(self):
        with self.client.post(
            "/loyalty/award",
            json=award_data(self.state.user_id),
            catch_response=True,
            name="POST /loyalty/award",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Award failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def redeem(self):
        balance = self.client.get(f"/loyalty/{self.state.user_id}", name="GET /loyalty/{user_id}").json()
        with self.client.post(
            "/loyalty/redeem",
            json={"user_id": self.state.user_id, "points": redemption_points(balance["current_points"])},
            catch_response=True,
            name="POST /loyalty/redeem",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Redeem failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def history(self):
        self.client.get(
            f"/loyalty/{self.state.user_id}/transactions",
            params={"page": 1, "page_size": 10},
            name="GET /loyalty/{user_id}/transactions",
        )

    @task
    def done(self):
        self.interrupt()


class CardPaymentJourney(_StudentJourney):
    """Place -> card charge -> gateway confirmation -> refund."""

    state_class = PaymentState

    @task
    def place_order(self):
        self._place_order(payment_method="Card")

    @task
    def charge(self):
        with self.client.post(
            "/payments",
            json={"order_id": self.state.order_id, "method": "Card", "amount": self.state.total_amount},
            catch_response=True,
            name="POST /payments",
        ) as resp:
            if resp.status_code == 201:
                self.state.payment_id = resp.json()["payment_id"]
            else:
                resp.failure(f"Charge failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def confirm(self):
        with self.client.post(
            f"/payments/{self.state.payment_id}/confirm",
            json={"succeeded": True},
            catch_response=True,
            name="POST /payments/{id}/confirm",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Confirm failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def refund(self):
        with self.client.post(
            f"/payments/{self.state.payment_id}/refund",
            json={"reason": "Load test refund"},
            catch_response=True,
            name="POST /payments/{id}/refund",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Refund failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()
