"""Domain errors for CampusEats.

Expected business failures are raised as one of the exceptions below. Each
carries an ``ErrorKind`` tag and its messages keyed by field, so callers can
branch on the kind and show every message collected for a request:

- EntityNotFound (NOT_FOUND)
- InputInvalid (VALIDATION_FAILED)
- InvalidTransition (INVALID_TRANSITION)
- OrderFinalized (FINALIZED)
- NotOrderOwner (UNAUTHORIZED)
- BusinessRuleViolation (CONFLICT)

LedgerOutOfBalance is not a business failure: it means a user's balance no
longer matches their ledger. It aborts the unit of work and surfaces as an
internal error.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "NotFound"
    VALIDATION_FAILED = "ValidationFailed"
    INVALID_TRANSITION = "InvalidTransition"
    FINALIZED = "Finalized"
    UNAUTHORIZED = "Unauthorized"
    CONFLICT = "Conflict"


class CampusEatsError(Exception):
    """Base class for all expected business-rule failures.

    Args:
        messages: Mapping of field name to the list of messages for it.
    """

    kind: ErrorKind = ErrorKind.CONFLICT

    def __init__(self, messages: dict[str, list[str]]) -> None:
        self.messages = {field: list(msgs) for field, msgs in messages.items()}
        super().__init__(self.summary)

    @property
    def summary(self) -> str:
        return "; ".join(msg for msgs in self.messages.values() for msg in msgs)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "messages": self.messages}


class EntityNotFound(CampusEatsError):
    kind = ErrorKind.NOT_FOUND

    @classmethod
    def for_entity(cls, entity: str, identifier) -> EntityNotFound:
        return cls({entity.lower(): [f"{entity} with ID {identifier} not found"]})


class InputInvalid(CampusEatsError):
    kind = ErrorKind.VALIDATION_FAILED


class InvalidTransition(CampusEatsError):
    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__({"status": [f"Invalid status transition from {current} to {target}"]})


class OrderFinalized(CampusEatsError):
    kind = ErrorKind.FINALIZED


class NotOrderOwner(CampusEatsError):
    kind = ErrorKind.UNAUTHORIZED


class BusinessRuleViolation(CampusEatsError):
    kind = ErrorKind.CONFLICT


class LedgerOutOfBalance(Exception):
    """A user's point balance disagrees with the sum of their ledger entries."""

    def __init__(self, user_id: str, balance: float, ledger_total: float) -> None:
        self.user_id = user_id
        self.balance = balance
        self.ledger_total = ledger_total
        super().__init__(f"Loyalty balance {balance} for user {user_id} does not match ledger total {ledger_total}")
