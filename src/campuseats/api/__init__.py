"""CampusEats HTTP API package."""

from campuseats.api.context import REQUEST_ID_HEADER, request_context_middleware
from campuseats.api.errors import register_error_handlers
from campuseats.api.routes import (
    kitchen_router,
    loyalty_router,
    menu_router,
    order_router,
    payment_router,
    user_router,
)

ROUTERS = [menu_router, user_router, order_router, kitchen_router, loyalty_router, payment_router]

__all__ = [
    "REQUEST_ID_HEADER",
    "ROUTERS",
    "kitchen_router",
    "loyalty_router",
    "menu_router",
    "order_router",
    "payment_router",
    "register_error_handlers",
    "request_context_middleware",
    "user_router",
]
