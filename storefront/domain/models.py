from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import (
    String, Integer, Boolean, Numeric, Float, Text, DateTime, JSON,
    ForeignKey, UniqueConstraint, CheckConstraint,
)
from datetime import datetime, timezone
from typing import Optional
import uuid

from .enums import UserRole, Category, ProductStatus, ProductFit, OrderStatus, PaymentStatus

PLACEHOLDER_IMAGE = "/images/placeholder.jpg"
DEFAULT_BRAND = "Zeynix"

def new_id() -> str:
    return uuid.uuid4().hex

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class Base(DeclarativeBase):
    pass

class User(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    role: Mapped[str] = mapped_column(String(10), default=UserRole.USER.value)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # Owned by the credential service; never read here
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

class Product(Base):
    __tablename__ = "products"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(100))
    brand: Mapped[str] = mapped_column(String(100), default=DEFAULT_BRAND)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    images: Mapped[list] = mapped_column(JSON, default=list)
    category: Mapped[str] = mapped_column(String(20), default=Category.CASUAL.value)
    actual_price: Mapped[float] = mapped_column(Numeric(10, 2))
    discount_price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2), nullable=True)
    discount: Mapped[int] = mapped_column(Integer, default=0)
    rating: Mapped[float] = mapped_column(Float, default=0)
    total_ratings: Mapped[int] = mapped_column(Integer, default=0)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    status: Mapped[str] = mapped_column(String(20), default=ProductStatus.PUBLISHED.value)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    product_fit: Mapped[str] = mapped_column(String(20), default=ProductFit.CASUAL.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
    sizes: Mapped[list["SizeStock"]] = relationship(
        "SizeStock", back_populates="product", cascade="all, delete-orphan",
        order_by="SizeStock.id", lazy="selectin",
    )

    @property
    def final_price(self) -> float:
        if self.discount_price:
            return float(self.discount_price)
        return float(self.actual_price)

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else PLACEHOLDER_IMAGE

    def size_stock(self, size: str) -> Optional["SizeStock"]:
        """Exact, case-sensitive match on the size label."""
        return next((s for s in self.sizes if s.size == size), None)

    def recalculate_discount(self) -> None:
        actual = float(self.actual_price or 0)
        discounted = float(self.discount_price or 0)
        if actual and discounted and discounted < actual:
            self.discount = round((actual - discounted) / actual * 100)
        else:
            self.discount = 0

class SizeStock(Base):
    __tablename__ = "product_sizes"
    __table_args__ = (
        UniqueConstraint("product_id", "size", name="uq_product_sizes_product_size"),
        CheckConstraint("stock >= 0", name="ck_product_sizes_stock_non_negative"),
    )
    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[str] = mapped_column(ForeignKey("products.id", ondelete="CASCADE"), index=True)
    size: Mapped[str] = mapped_column(String(5))
    stock: Mapped[int] = mapped_column(Integer, default=0)
    in_stock: Mapped[bool] = mapped_column(Boolean, default=True)
    product: Mapped[Product] = relationship("Product", back_populates="sizes")

class Order(Base):
    __tablename__ = "orders"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    order_number: Mapped[str] = mapped_column(String(30), unique=True, index=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    total_amount: Mapped[float] = mapped_column(Numeric(10, 2))
    shipping_address: Mapped[dict] = mapped_column(JSON)
    delivery_address: Mapped[dict] = mapped_column(JSON)
    status: Mapped[str] = mapped_column(String(20), default=OrderStatus.PENDING.value, index=True)
    payment_status: Mapped[str] = mapped_column(String(20), default=PaymentStatus.PENDING.value)
    payment_method: Mapped[str] = mapped_column(String(30))
    gateway_order_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    gateway_payment_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    expected_delivery: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
    items: Mapped[list["OrderItem"]] = relationship(
        "OrderItem", back_populates="order", cascade="all, delete-orphan",
        order_by="OrderItem.id", lazy="selectin",
    )
    user: Mapped[User] = relationship("User", lazy="selectin")

class OrderItem(Base):
    __tablename__ = "order_items"
    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[str] = mapped_column(ForeignKey("orders.id", ondelete="CASCADE"), index=True)
    # Plain reference: the snapshot below must outlive product edits and archiving
    product_id: Mapped[str] = mapped_column(String(32), index=True)
    product_title: Mapped[str] = mapped_column(String(100))
    product_image: Mapped[str] = mapped_column(String(500))
    product_brand: Mapped[str] = mapped_column(String(100))
    size: Mapped[str] = mapped_column(String(5))
    quantity: Mapped[int]
    price: Mapped[float] = mapped_column(Numeric(10, 2))
    total_price: Mapped[float] = mapped_column(Numeric(10, 2))
    order: Mapped[Order] = relationship("Order", back_populates="items")

class OrderCounter(Base):
    """Last order sequence handed out per calendar day (YYMMDD)."""
    __tablename__ = "order_counters"
    day: Mapped[str] = mapped_column(String(6), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, default=0)
