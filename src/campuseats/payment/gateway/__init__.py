"""Payment gateway factory.

get_gateway() / set_gateway() / reset_gateway() swap the active adapter.
``PAYMENT_GATEWAY`` selects the default; only ``fake`` ships with the
project.
"""

import os

from campuseats.payment.gateway.fake_adapter import FakeGateway
from campuseats.payment.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None

_ADAPTERS = {"fake": FakeGateway}


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building the configured default on first use."""
    global _current_gateway
    if _current_gateway is None:
        name = os.getenv("PAYMENT_GATEWAY", "fake").lower()
        if name not in _ADAPTERS:
            raise ValueError(f"Unknown payment gateway {name!r}; expected one of {sorted(_ADAPTERS)}")
        _current_gateway = _ADAPTERS[name]()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
