"""Payment gateway port.

The contract card payments go through. Domain code only sees ChargeResult
and RefundResult, so adapters can be swapped without touching handlers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeResult:
    """Result of a charge attempt."""

    success: bool
    gateway_reference: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    success: bool
    gateway_refund_reference: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_charge(
        self,
        amount: float,
        currency: str,
        description: str,
        idempotency_key: str,
    ) -> ChargeResult:
        """Start a card charge; the final outcome arrives through ConfirmPayment."""
        ...

    @abstractmethod
    def create_refund(
        self,
        gateway_reference: str,
        amount: float,
        reason: str,
    ) -> RefundResult:
        """Refund a previously captured charge."""
        ...
