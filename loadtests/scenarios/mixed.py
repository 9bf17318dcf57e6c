"""Mixed CampusEats workload scenario.

Combines the campus journeys with weights that model a lunch rush: most
students order and collect, some cancel, some spend points, and a share
pays by card. This is the recommended scenario for a load baseline.
"""

from locust import HttpUser, between

from loadtests.scenarios.campus import (
    CardPaymentJourney,
    LoyaltyRedemptionJourney,
    OrderCancellationJourney,
    OrderLifecycleJourney,
)


class MixedWorkloadUser(HttpUser):
    """Lunch-rush traffic.

    - Order lifecycle through the kitchen (50%)
    - Card payment with refund (20%)
    - Loyalty award and redemption (20%)
    - Cancellation (10%)
    """

    wait_time = between(0.5, 2.0)

    tasks = {
        OrderLifecycleJourney: 5,
        CardPaymentJourney: 2,
        LoyaltyRedemptionJourney: 2,
        OrderCancellationJourney: 1,
    }


class KitchenRushUser(HttpUser):
    """Only the kitchen path, for measuring status-update contention."""

    wait_time = between(0.1, 0.5)

    tasks = [OrderLifecycleJourney]
