from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from storefront.api.dependencies import get_current_user
from storefront.application.schemas import ApiResponse, OrderCreate, OrderCreated, OrderPage, OrderRead
from storefront.application.service import OrderService
from storefront.core_settings import Settings, get_settings
from storefront.domain.models import User
from storefront.infrastructure.db import get_db

router = APIRouter(prefix="/api/orders", tags=["orders"])

@router.post("", response_model=ApiResponse[OrderCreated], status_code=201)
def create_order(payload: OrderCreate, user: User = Depends(get_current_user),
                 db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    order = OrderService(db, settings).create(user, payload)
    return ApiResponse(message="Order created successfully", data=OrderCreated.model_validate(order))

@router.get("", response_model=ApiResponse[OrderPage])
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[str] = Query(None, description="Order status, or 'all'"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """List the caller's orders, newest first."""
    orders, total = OrderService(db, settings).list_for_user(user, page, limit, status)
    return ApiResponse(data=OrderPage.build(orders, page, limit, total))

@router.get("/{order_id}", response_model=ApiResponse[OrderRead])
def get_order(order_id: str, user: User = Depends(get_current_user),
              db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    order = OrderService(db, settings).get_for_user(user, order_id)
    return ApiResponse(data=OrderRead.model_validate(order))
