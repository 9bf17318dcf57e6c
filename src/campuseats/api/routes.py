"""FastAPI routes for CampusEats: menu, users, orders, kitchen, loyalty, payments."""

import json
import os
from datetime import date

from fastapi import APIRouter, HTTPException
from protean.utils.globals import current_domain

from campuseats.api.schemas import (
    AwardPointsRequest,
    BalanceResponse,
    CancelOrderRequest,
    ConfigureGatewayRequest,
    ConfirmPaymentRequest,
    CreateProductRequest,
    GatewayConfigResponse,
    InventoryReportResponse,
    LoyaltyTransactionResponse,
    OrderResponse,
    OrderStatusResponse,
    PaymentPageResponse,
    PaymentResponse,
    PlaceOrderRequest,
    ProcessPaymentRequest,
    ProductIdResponse,
    ProductResponse,
    RedeemPointsRequest,
    RedeemPointsResponse,
    RefundPaymentRequest,
    RegisterUserRequest,
    StatusResponse,
    TransactionIdResponse,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UserIdResponse,
    UserResponse,
)
from campuseats.kitchen.queries import get_daily_inventory_report, get_pending_orders
from campuseats.loyalty.award import AwardPoints
from campuseats.loyalty.policy import DEFAULT_PAGE_SIZE
from campuseats.loyalty.queries import get_balance, get_transactions
from campuseats.loyalty.redemption import RedeemPoints
from campuseats.menu.management import CreateProduct, DeleteProduct, UpdateProduct
from campuseats.menu.queries import get_menu, get_product
from campuseats.order.cancellation import CancelOrder
from campuseats.order.placement import PlaceOrder
from campuseats.order.queries import get_order, get_user_orders
from campuseats.order.retry import process_with_retry
from campuseats.order.status import UpdateOrderStatus
from campuseats.payment.confirmation import ConfirmPayment
from campuseats.payment.gateway import get_gateway
from campuseats.payment.gateway.fake_adapter import FakeGateway
from campuseats.payment.processing import ProcessPayment
from campuseats.payment.queries import get_all_payments, get_order_payments, get_payment, get_user_payments
from campuseats.payment.refund import RefundPayment
from campuseats.user.queries import get_user
from campuseats.user.registration import RegisterUser

# ---------------------------------------------------------------------------
# Menu Router
# ---------------------------------------------------------------------------
menu_router = APIRouter(prefix="/menu", tags=["menu"])


@menu_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        image_url=body.image_url,
        allergens=json.dumps(body.allergens),
        dietary_restriction=body.dietary_restriction,
        is_available=body.is_available,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@menu_router.get("", response_model=list[ProductResponse])
async def list_menu(category: str | None = None, available_only: bool = False) -> list[dict]:
    return get_menu(category=category, available_only=available_only)


@menu_router.get("/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str) -> dict:
    return get_product(product_id)


@menu_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        image_url=body.image_url,
        allergens=json.dumps(body.allergens) if body.allergens is not None else None,
        dietary_restriction=body.dietary_restriction,
        is_available=body.is_available,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@menu_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="deleted")


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(
        email=body.email,
        full_name=body.full_name,
        phone_number=body.phone_number,
        student_id=body.student_id,
        role=body.role,
        opening_points=body.opening_points,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@user_router.get("/{user_id}", response_model=UserResponse)
async def read_user(user_id: str) -> dict:
    return get_user(user_id)


@user_router.get("/{user_id}/orders", response_model=list[OrderResponse])
async def list_user_orders(user_id: str) -> list[dict]:
    return get_user_orders(user_id)


@user_router.get("/{user_id}/payments", response_model=list[PaymentResponse])
async def list_user_payments(user_id: str) -> list[dict]:
    return get_user_payments(user_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest) -> dict:
    command = PlaceOrder(
        user_id=body.user_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        payment_method=body.payment_method,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return get_order(order_id)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str, user_id: str | None = None) -> dict:
    return get_order(order_id, requester_id=user_id)


@order_router.put("/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderStatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, reason=body.reason)
    status = process_with_retry(command)
    return OrderStatusResponse(order_id=order_id, status=status)


@order_router.post("/{order_id}/cancel", response_model=OrderStatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> OrderStatusResponse:
    command = CancelOrder(order_id=order_id, user_id=body.user_id, reason=body.reason)
    status = process_with_retry(command)
    return OrderStatusResponse(order_id=order_id, status=status)


@order_router.get("/{order_id}/payments", response_model=list[PaymentResponse])
async def list_order_payments(order_id: str) -> list[dict]:
    return get_order_payments(order_id)


# ---------------------------------------------------------------------------
# Kitchen Router
# ---------------------------------------------------------------------------
kitchen_router = APIRouter(prefix="/kitchen", tags=["kitchen"])


@kitchen_router.get("/orders", response_model=list[OrderResponse])
async def list_pending_orders() -> list[dict]:
    return get_pending_orders()


@kitchen_router.put("/orders/{order_id}/status", response_model=OrderStatusResponse)
async def kitchen_update_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderStatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, reason=body.reason)
    status = process_with_retry(command)
    return OrderStatusResponse(order_id=order_id, status=status)


@kitchen_router.get("/reports/daily", response_model=InventoryReportResponse)
async def daily_inventory_report(report_date: date | None = None) -> dict:
    return get_daily_inventory_report(report_date)


# ---------------------------------------------------------------------------
# Loyalty Router
# ---------------------------------------------------------------------------
loyalty_router = APIRouter(prefix="/loyalty", tags=["loyalty"])


@loyalty_router.post("/redeem", response_model=RedeemPointsResponse)
async def redeem_points(body: RedeemPointsRequest) -> dict:
    command = RedeemPoints(user_id=body.user_id, points=body.points, order_id=body.order_id)
    return current_domain.process(command, asynchronous=False)


@loyalty_router.post("/award", status_code=201, response_model=TransactionIdResponse)
async def award_points(body: AwardPointsRequest) -> TransactionIdResponse:
    command = AwardPoints(
        user_id=body.user_id,
        points=body.points,
        description=body.description,
        order_id=body.order_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return TransactionIdResponse(transaction_id=result)


@loyalty_router.get("/{user_id}", response_model=BalanceResponse)
async def read_balance(user_id: str) -> dict:
    return get_balance(user_id)


@loyalty_router.get("/{user_id}/transactions", response_model=list[LoyaltyTransactionResponse])
async def list_transactions(user_id: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> list[dict]:
    return get_transactions(user_id, page=page, page_size=page_size)


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("", status_code=201, response_model=PaymentResponse)
async def process_payment(body: ProcessPaymentRequest) -> dict:
    command = ProcessPayment(
        order_id=body.order_id,
        method=body.method,
        amount=body.amount,
        loyalty_points_used=body.loyalty_points_used,
    )
    payment_id = current_domain.process(command, asynchronous=False)
    return get_payment(payment_id)


@payment_router.get("", response_model=PaymentPageResponse)
async def list_payments(
    status: str | None = None,
    method: str | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> dict:
    return get_all_payments(status=status, method=method, page=page, page_size=page_size)


@payment_router.get("/{payment_id}", response_model=PaymentResponse)
async def read_payment(payment_id: str) -> dict:
    return get_payment(payment_id)


@payment_router.post("/{payment_id}/confirm", response_model=PaymentResponse)
async def confirm_payment(payment_id: str, body: ConfirmPaymentRequest) -> dict:
    command = ConfirmPayment(
        payment_id=payment_id,
        succeeded=body.succeeded,
        gateway_reference=body.gateway_reference,
        failure_reason=body.failure_reason,
    )
    current_domain.process(command, asynchronous=False)
    return get_payment(payment_id)


@payment_router.post("/{payment_id}/refund", response_model=PaymentResponse)
async def refund_payment(payment_id: str, body: RefundPaymentRequest) -> dict:
    current_domain.process(RefundPayment(payment_id=payment_id, reason=body.reason), asynchronous=False)
    return get_payment(payment_id)


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only)."""
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(should_succeed=body.should_succeed, failure_reason=body.failure_reason)
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )
