"""CampusEats bounded context: campus food ordering and loyalty.

Handles the order lifecycle (placement, kitchen workflow, cancellation),
the loyalty ledger (accrual, redemption, staff awards), the menu catalogue
and per-order payments. Everything lives in one domain so that completing
an order and posting its loyalty accrual commit in the same unit of work.
"""

from protean.domain import Domain

from campuseats.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
campuseats = Domain(name="campuseats")
