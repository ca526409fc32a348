"""Storefront domain exceptions.

Raised by the application layer when a request or business rule is
violated. The API layer renders them into the JSON envelope using
``status_code``.
"""

from typing import Any, Optional


class StorefrontError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[list[dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationFailed(StorefrontError):
    """A request field is missing or malformed."""
    status_code = 400
    default_message = "Validation failed"


class InvalidArgument(ValidationFailed):
    """An identifier is not well-formed."""
    default_message = "Invalid identifier"


class AuthenticationError(StorefrontError):
    status_code = 401
    default_message = "Authentication required"


class AccessDenied(StorefrontError):
    """Valid credential, but wrong owner or insufficient role."""
    status_code = 403
    default_message = "Access denied"


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ProductNotFound(NotFound):
    default_message = "Product not found"


class OrderNotFound(NotFound):
    default_message = "Order not found"


class ProductUnavailable(StorefrontError):
    """The product is inactive and cannot be ordered."""
    status_code = 400

    def __init__(self, product_title: str):
        self.product_title = product_title
        super().__init__(f"Product {product_title} is not available")


class InsufficientStock(StorefrontError):
    status_code = 400

    def __init__(self, product: str, size: str, requested: int, available: int):
        self.product = product
        self.size = size
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product} in size {size}",
            errors=[{"product": product, "size": size, "requested": requested, "available": available}],
        )


class PriceMismatch(StorefrontError):
    """The client-supplied price differs from the catalog price."""
    status_code = 400
    default_message = "Price has changed, please review your cart"


class InvalidStatusTransition(StorefrontError):
    status_code = 400

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change order status from {current} to {requested}")


class PersistenceFailure(StorefrontError):
    status_code = 500
    default_message = "Internal server error creating order"


class PaymentGatewayError(StorefrontError):
    status_code = 502
    default_message = "Payment gateway unavailable"
