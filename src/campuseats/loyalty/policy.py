"""Loyalty programme constants and point arithmetic."""

from campuseats.utils import money

# Share of the order value (net of loyalty-funded payments) credited on completion
ACCRUAL_RATE = 0.10

# Currency value of a single point when redeemed
POINT_VALUE = 0.1

MINIMUM_REDEMPTION = 50
MAXIMUM_REDEMPTION = 10_000

DEFAULT_PAGE_SIZE = 20
MAXIMUM_PAGE_SIZE = 100


def accrual_for(order_total, paid_with_points=0.0) -> float:
    """Points earned for an order, rounded to two decimals."""
    base = max(money.subtract(order_total, paid_with_points), 0.0)
    return money.multiply(base, ACCRUAL_RATE)


def discount_for(points) -> float:
    return money.multiply(points, POINT_VALUE)


def points_for(amount) -> float:
    """Points needed to cover ``amount`` in currency."""
    return money.quantize(money.to_decimal(amount) / money.to_decimal(POINT_VALUE))
