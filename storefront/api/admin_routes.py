from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from storefront.api.dependencies import require_admin
from storefront.application.catalog import ProductService
from storefront.application.schemas import (
    ApiResponse, OrderPage, OrderRead, ProductCreate, ProductRead, ProductUpdate, StatusUpdate,
)
from storefront.application.service import OrderService
from storefront.core_settings import Settings, get_settings
from storefront.infrastructure.db import get_db

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])

@router.get("/orders", response_model=ApiResponse[OrderPage])
def list_all_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[str] = None,
    payment_status: Optional[str] = Query(None, alias="paymentStatus"),
    search: Optional[str] = Query(None, max_length=100, description="Order number, customer name or email"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    orders, total = OrderService(db, settings).list_all(page, limit, status, payment_status, search)
    return ApiResponse(data=OrderPage.build(orders, page, limit, total))

@router.get("/orders/{order_id}", response_model=ApiResponse[OrderRead])
def get_any_order(order_id: str, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    order = OrderService(db, settings).get(order_id)
    return ApiResponse(data=OrderRead.model_validate(order))

@router.patch("/orders/{order_id}/status", response_model=ApiResponse[OrderRead])
def update_order_status(order_id: str, payload: StatusUpdate,
                        db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    order = OrderService(db, settings).update_status(order_id, payload.status)
    return ApiResponse(message=f"Order status updated to {order.status}", data=OrderRead.model_validate(order))

@router.delete("/orders/{order_id}", response_model=ApiResponse[OrderRead])
def delete_order(order_id: str, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    order = OrderService(db, settings).deactivate(order_id)
    return ApiResponse(message="Order deleted", data=OrderRead.model_validate(order))

@router.post("/products", response_model=ApiResponse[ProductRead], status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    product = ProductService(db).create(payload)
    return ApiResponse(message="Product created successfully", data=ProductRead.model_validate(product))

@router.put("/products/{product_id}", response_model=ApiResponse[ProductRead])
def update_product(product_id: str, payload: ProductUpdate, db: Session = Depends(get_db)):
    product = ProductService(db).update(product_id, payload)
    return ApiResponse(message="Product updated successfully", data=ProductRead.model_validate(product))

@router.delete("/products/{product_id}", response_model=ApiResponse[ProductRead])
def archive_product(product_id: str, db: Session = Depends(get_db)):
    product = ProductService(db).archive(product_id)
    return ApiResponse(message="Product archived", data=ProductRead.model_validate(product))
