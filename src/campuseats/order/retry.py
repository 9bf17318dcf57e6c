"""Re-running order commands that lost an optimistic-locking race."""

from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from campuseats.domain import logger

DEFAULT_ATTEMPTS = 3


def process_with_retry(command, attempts: int = DEFAULT_ATTEMPTS):
    """Process ``command`` synchronously, retrying on ``ExpectedVersionError``.

    Protean already re-runs a handler a few times when its unit of work hits a
    stale aggregate version. This covers the conflict that is still left once
    those retries are exhausted. Each attempt re-reads the order, so a retried
    completion finds the order already Completed and does nothing. The last
    conflict is re-raised once ``attempts`` are used up.
    """
    for attempt in range(1, attempts + 1):
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError as exc:
            if attempt == attempts:
                raise
            logger.warning(
                "order write conflict, retrying",
                command=type(command).__name__,
                order_id=getattr(command, "order_id", None),
                attempt=attempt,
                error=str(exc),
            )
