from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar
import math

from storefront.domain.enums import Category, Size, ProductStatus, ProductFit

T = TypeVar("T")

class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by success and failure responses."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    errors: Optional[list[dict[str, Any]]] = None

# Orders

class ShippingAddress(CamelModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    phone: str = Field(min_length=5, max_length=20)
    email: str = Field(min_length=3, max_length=255)
    address_line1: str = Field(min_length=1, max_length=200)
    address_line2: str = ""
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    pincode: str = Field(min_length=3, max_length=12)
    country: str = "India"

class OrderLineIn(CamelModel):
    product_id: str = Field(min_length=1)
    size: Size
    quantity: int = Field(ge=1, le=100)
    price: float = Field(gt=0)

class OrderCreate(CamelModel):
    items: list[OrderLineIn] = Field(min_length=1)
    total_amount: float = Field(gt=0)
    shipping_address: ShippingAddress

class OrderCreated(CamelModel):
    id: str
    order_number: str
    total_amount: float
    status: str

class OrderItemRead(CamelModel):
    product_id: str
    product_title: str
    product_image: str
    product_brand: str
    size: str
    quantity: int
    price: float
    total_price: float

class CustomerSummary(CamelModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None

class OrderRead(CamelModel):
    id: str
    order_number: str
    user_id: str
    user: Optional[CustomerSummary] = None
    items: list[OrderItemRead]
    total_amount: float
    shipping_address: dict[str, Any]
    delivery_address: dict[str, Any]
    status: str
    payment_status: str
    payment_method: str
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    expected_delivery: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

class OrderPage(BaseModel):
    orders: list[OrderRead]
    pagination: Pagination

    @classmethod
    def build(cls, orders, page: int, limit: int, total: int) -> "OrderPage":
        return cls(
            orders=[OrderRead.model_validate(o) for o in orders],
            pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
        )

class StatusUpdate(BaseModel):
    # Checked against OrderStatus in the service so the error names the allowed values
    status: str

# Catalog

class SizeStockIn(CamelModel):
    size: Size
    stock: int = Field(ge=0)

class SizeStockRead(CamelModel):
    size: str
    stock: int
    in_stock: bool

class ProductCreate(CamelModel):
    title: str = Field(min_length=1, max_length=100)
    brand: str = Field("Zeynix", max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    images: list[str] = Field(default_factory=list)
    category: Category = Category.CASUAL
    actual_price: float = Field(ge=0)
    discount_price: Optional[float] = Field(None, ge=0)
    rating: float = Field(0, ge=0, le=5)
    featured: bool = False
    status: ProductStatus = ProductStatus.PUBLISHED
    is_active: bool = True
    product_fit: ProductFit = ProductFit.CASUAL
    sizes: list[SizeStockIn] = Field(default_factory=list)

class ProductUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    images: Optional[list[str]] = None
    category: Optional[Category] = None
    actual_price: Optional[float] = Field(None, ge=0)
    discount_price: Optional[float] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    featured: Optional[bool] = None
    status: Optional[ProductStatus] = None
    is_active: Optional[bool] = None
    product_fit: Optional[ProductFit] = None
    sizes: Optional[list[SizeStockIn]] = None

class ProductRead(CamelModel):
    id: str
    title: str
    brand: str
    description: Optional[str] = None
    images: list[str]
    category: str
    actual_price: float
    discount_price: Optional[float] = None
    discount: int
    final_price: float
    rating: float
    featured: bool
    status: str
    is_active: bool
    product_fit: str
    sizes: list[SizeStockRead]
    created_at: datetime
    updated_at: Optional[datetime] = None

# Payments

class PaymentOrderCreate(CamelModel):
    order_id: str

class PaymentOrderRead(CamelModel):
    order_id: str
    order_number: str
    gateway_order_id: str
    amount: int
    currency: str
    key_id: str

class PaymentVerify(CamelModel):
    order_id: str
    gateway_order_id: str = Field(min_length=1)
    gateway_payment_id: str = Field(min_length=1)
    signature: str = Field(min_length=1)

class PaymentVerifyRead(CamelModel):
    order_id: str
    order_number: str
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    payment_status: str
    status: str
    is_valid: bool

class PaymentStatusRead(CamelModel):
    order_id: str
    order_number: str
    payment_status: str
    status: str
    total_amount: float
    payment_method: str
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
