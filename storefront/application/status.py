"""Order status state machine."""

from typing import Optional

from storefront.domain.enums import OrderStatus, PaymentStatus
from storefront.domain.errors import InvalidStatusTransition, ValidationFailed

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING.value: {OrderStatus.CONFIRMED.value, OrderStatus.CANCELLED.value},
    OrderStatus.CONFIRMED.value: {
        OrderStatus.PROCESSING.value,
        OrderStatus.SHIPPED.value,
        OrderStatus.DELIVERED.value,
        OrderStatus.CANCELLED.value,
    },
    OrderStatus.PROCESSING.value: {OrderStatus.SHIPPED.value, OrderStatus.CANCELLED.value},
    OrderStatus.SHIPPED.value: {OrderStatus.DELIVERED.value},
    OrderStatus.DELIVERED.value: set(),
    OrderStatus.CANCELLED.value: set(),
}

TERMINAL_STATES = {OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value}

def parse_order_status(value: str) -> str:
    try:
        return OrderStatus(value).value
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationFailed(f"Invalid status. Must be one of: {allowed}")

def parse_status_filter(value: Optional[str]) -> Optional[str]:
    """Listing filter: missing or ``all`` means no filter."""
    if not value or value == "all":
        return None
    return parse_order_status(value)

def parse_payment_status_filter(value: Optional[str]) -> Optional[str]:
    if not value or value == "all":
        return None
    try:
        return PaymentStatus(value).value
    except ValueError:
        allowed = ", ".join(s.value for s in PaymentStatus)
        raise ValidationFailed(f"Invalid payment status. Must be one of: {allowed}")

def can_transition(current: str, requested: str) -> bool:
    if current == requested:
        return True
    return requested in ALLOWED_TRANSITIONS.get(current, set())

def check_transition(current: str, requested: str, enforce: bool = True) -> None:
    """With ``enforce`` off any status may follow any other (manual override)."""
    if enforce and not can_transition(current, requested):
        raise InvalidStatusTransition(current, requested)
