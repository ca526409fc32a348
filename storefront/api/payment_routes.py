from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.dependencies import get_current_user, get_payment_gateway
from storefront.application.payments import PaymentService
from storefront.application.schemas import (
    ApiResponse, PaymentOrderCreate, PaymentOrderRead, PaymentStatusRead, PaymentVerify, PaymentVerifyRead,
)
from storefront.core_settings import Settings, get_settings
from storefront.domain.errors import ValidationFailed
from storefront.domain.models import User
from storefront.infrastructure.db import get_db
from storefront.infrastructure.payment_gateway import RazorpayGateway

router = APIRouter(prefix="/api/payments", tags=["payments"])

@router.post("/create-order", response_model=ApiResponse[PaymentOrderRead], status_code=201)
def create_payment_order(
    payload: PaymentOrderCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
):
    result = PaymentService(db, settings, gateway).create_gateway_order(user, payload.order_id)
    return ApiResponse(data=PaymentOrderRead(**result))

@router.post("/verify", response_model=ApiResponse[PaymentVerifyRead])
def verify_payment(
    payload: PaymentVerify,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
):
    order, is_valid = PaymentService(db, settings, gateway).verify(user, payload)
    if not is_valid:
        raise ValidationFailed("Payment verification failed")
    data = PaymentVerifyRead(
        order_id=order.id,
        order_number=order.order_number,
        gateway_order_id=order.gateway_order_id,
        gateway_payment_id=order.gateway_payment_id,
        payment_status=order.payment_status,
        status=order.status,
        is_valid=is_valid,
    )
    return ApiResponse(message="Payment verified successfully", data=data)

@router.get("/status", response_model=ApiResponse[PaymentStatusRead])
def get_payment_status(
    order_number: str = Query(..., alias="orderNumber", min_length=1),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    gateway: RazorpayGateway = Depends(get_payment_gateway),
):
    order = PaymentService(db, settings, gateway).payment_status(user, order_number)
    data = PaymentStatusRead(
        order_id=order.id,
        order_number=order.order_number,
        payment_status=order.payment_status,
        status=order.status,
        total_amount=order.total_amount,
        payment_method=order.payment_method,
        gateway_order_id=order.gateway_order_id,
        gateway_payment_id=order.gateway_payment_id,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
    return ApiResponse(data=data)
