"""Configurable fake payment gateway for development and testing.

No external calls are made. ``configure()`` flips the gateway between
accepting and declining, and every call is recorded in ``calls`` so tests
can assert on what the handlers sent.
"""

from uuid import uuid4

from campuseats.payment.gateway.port import ChargeResult, PaymentGateway, RefundResult


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_charge(
        self,
        amount: float,
        currency: str,
        description: str,
        idempotency_key: str,
    ) -> ChargeResult:
        self.calls.append(
            {
                "method": "create_charge",
                "amount": amount,
                "currency": currency,
                "description": description,
                "idempotency_key": idempotency_key,
            }
        )

        if self.should_succeed:
            return ChargeResult(
                success=True,
                gateway_reference=f"fake_session_{uuid4().hex[:12]}",
                gateway_status="open",
            )
        return ChargeResult(success=False, gateway_status="failed", failure_reason=self.failure_reason)

    def create_refund(
        self,
        gateway_reference: str,
        amount: float,
        reason: str,
    ) -> RefundResult:
        self.calls.append(
            {
                "method": "create_refund",
                "gateway_reference": gateway_reference,
                "amount": amount,
                "reason": reason,
            }
        )

        if self.should_succeed:
            return RefundResult(success=True, gateway_refund_reference=f"fake_refund_{uuid4().hex[:12]}")
        return RefundResult(success=False, failure_reason=self.failure_reason)
