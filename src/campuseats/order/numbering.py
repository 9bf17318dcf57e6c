"""Order number allocation."""

import random
from datetime import datetime

from protean.utils.globals import current_domain

from campuseats.domain import logger
from campuseats.order.order import Order

MAX_ATTEMPTS = 10


def format_order_number(day: datetime, suffix: int) -> str:
    return f"ORD-{day:%Y%m%d}-{suffix:04d}"


def allocate_order_number(now: datetime | None = None, rng: random.Random | None = None) -> str:
    """Pick an unused ``ORD-yyyyMMdd-NNNN`` number.

    The suffix is random in 1000..9999; a clash with an existing order is
    retried with a fresh suffix up to ``MAX_ATTEMPTS`` times.
    """
    now = now or datetime.now()
    rng = rng or random
    repo = current_domain.repository_for(Order)

    for attempt in range(1, MAX_ATTEMPTS + 1):
        candidate = format_order_number(now, rng.randint(1000, 9999))
        if not repo.number_taken(candidate):
            return candidate
        logger.warning("order number collision", order_number=candidate, attempt=attempt)

    raise RuntimeError(f"Could not allocate an order number after {MAX_ATTEMPTS} attempts")
