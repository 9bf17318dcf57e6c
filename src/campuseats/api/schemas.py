"""Pydantic request/response schemas for the CampusEats API.

These are external contracts, kept separate from the internal Protean
commands. Field checks that carry business meaning (quantities, point
limits, statuses) are left to the domain so every problem in a request is
reported together.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class ErrorBody(BaseModel):
    kind: str
    messages: dict[str, list[str]]


class ErrorResponse(BaseModel):
    error: ErrorBody


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str
    description: str
    price: float
    category: str
    image_url: str | None = None
    allergens: list[str] = Field(default_factory=list)
    dietary_restriction: str | None = None
    is_available: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Chicken Shawarma",
                    "description": "Grilled chicken wrap with garlic sauce",
                    "price": 25.0,
                    "category": "Main",
                    "allergens": ["gluten"],
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    category: str | None = None
    image_url: str | None = None
    allergens: list[str] | None = None
    dietary_restriction: str | None = None
    is_available: bool | None = None


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str
    price: float
    category: str
    image_url: str | None = None
    allergens: list[str]
    dietary_restriction: str | None = None
    is_available: bool


class ProductIdResponse(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    email: str
    full_name: str
    phone_number: str | None = None
    student_id: str | None = None
    role: str = "Student"
    opening_points: float = 0.0


class UserIdResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    user_id: str
    email: str
    full_name: str
    phone_number: str | None = None
    student_id: str | None = None
    role: str
    loyalty_points: float


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int
    special_instructions: str | None = None


class PlaceOrderRequest(BaseModel):
    user_id: str
    items: list[OrderItemRequest]
    payment_method: str | None = None
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "3f1c2b9e-0000-0000-0000-000000000001",
                    "items": [{"product_id": "9a7d-...", "quantity": 2}],
                    "payment_method": "Card",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str
    reason: str | None = None


class CancelOrderRequest(BaseModel):
    user_id: str
    reason: str | None = None


class OrderIdResponse(BaseModel):
    order_id: str


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class OrderLineResponse(BaseModel):
    line_id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    subtotal: float
    special_instructions: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    user_id: str
    status: str
    payment_status: str
    payment_method: str | None = None
    total_amount: float
    notes: str | None = None
    loyalty_points_earned: float
    created_at: datetime
    updated_at: datetime | None = None
    completed_at: datetime | None = None
    items: list[OrderLineResponse]


# ---------------------------------------------------------------------------
# Kitchen
# ---------------------------------------------------------------------------
class InventoryItemResponse(BaseModel):
    product_id: str
    product_name: str
    category: str | None = None
    quantity_sold: int
    revenue: float
    order_count: int
    average_order_value: float


class InventoryReportResponse(BaseModel):
    report_date: str
    items: list[InventoryItemResponse]
    total_revenue: float
    total_orders_processed: int
    total_items_sold: int


# ---------------------------------------------------------------------------
# Loyalty
# ---------------------------------------------------------------------------
class RedeemPointsRequest(BaseModel):
    user_id: str
    points: int
    order_id: str | None = None


class RedeemPointsResponse(BaseModel):
    points_redeemed: int
    discount_amount: float
    remaining_points: float
    message: str


class AwardPointsRequest(BaseModel):
    user_id: str
    points: float
    description: str | None = None
    order_id: str | None = None


class TransactionIdResponse(BaseModel):
    transaction_id: str


class BalanceResponse(BaseModel):
    user_id: str
    current_points: float
    total_earned: float
    total_redeemed: float
    points_value: float


class LoyaltyTransactionResponse(BaseModel):
    transaction_id: str
    points_change: float
    kind: str
    description: str
    order_id: str | None = None
    created_at: datetime


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
class ProcessPaymentRequest(BaseModel):
    order_id: str
    method: str
    amount: float
    loyalty_points_used: float | None = None


class ConfirmPaymentRequest(BaseModel):
    succeeded: bool
    gateway_reference: str | None = None
    failure_reason: str | None = None


class RefundPaymentRequest(BaseModel):
    reason: str | None = None


class PaymentResponse(BaseModel):
    payment_id: str
    order_id: str
    user_id: str
    amount: float
    method: str
    status: str
    gateway_reference: str | None = None
    gateway_refund_reference: str | None = None
    loyalty_points_used: float | None = None
    failure_reason: str | None = None
    refund_reason: str | None = None
    created_at: datetime
    paid_at: datetime | None = None
    failed_at: datetime | None = None
    refunded_at: datetime | None = None


class PaymentPageResponse(BaseModel):
    items: list[PaymentResponse]
    page: int
    page_size: int
    total_count: int


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Card declined"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str
