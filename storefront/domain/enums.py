from enum import Enum

class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"

class Category(str, Enum):
    CASUAL = "casual"
    FORMAL = "formal"
    ETHNIC = "ethnic"
    SPORTS = "sports"

class Size(str, Enum):
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    XXXL = "XXXL"

class ProductStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

class ProductFit(str, Enum):
    OVERSIZED = "OVERSIZED FIT"
    CASUAL = "CASUAL FIT"
    FORMAL = "FORMAL FIT"
    CLASSIC = "CLASSIC FIT"
    SLIM = "SLIM FIT"

class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
