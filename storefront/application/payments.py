from sqlalchemy.orm import Session

from shared.core import get_logger
from storefront.core_settings import Settings
from storefront.domain.enums import OrderStatus, PaymentStatus
from storefront.domain.errors import AccessDenied, OrderNotFound, ValidationFailed
from storefront.domain.models import Order, User
from storefront.infrastructure.payment_gateway import RazorpayGateway
from .schemas import PaymentVerify
from .service import FINALIZED_PAYMENT_STATUSES, OrderService

logger = get_logger(__name__)

class PaymentService:
    def __init__(self, db: Session, settings: Settings, gateway: RazorpayGateway):
        self.db = db
        self.settings = settings
        self.gateway = gateway
        self.orders = OrderService(db, settings)

    def create_gateway_order(self, user: User, order_id: str) -> dict:
        order = self.orders.get_for_user(user, order_id)
        if order.payment_status in FINALIZED_PAYMENT_STATUSES:
            raise ValidationFailed(f"Payment for order {order.order_number} is already {order.payment_status}")
        if order.status == OrderStatus.CANCELLED.value:
            raise ValidationFailed(f"Order {order.order_number} is cancelled")

        amount = int(round(float(order.total_amount) * 100))
        remote = self.gateway.create_order(amount, self.settings.PAYMENT_CURRENCY, order.order_number)
        order.gateway_order_id = remote["id"]
        self.db.commit()
        logger.info(
            f"Payment order created for {order.order_number}",
            extra={'extra_fields': {'order_id': order.id, 'gateway_order_id': remote["id"], 'amount': amount}}
        )
        return {
            "order_id": order.id,
            "order_number": order.order_number,
            "gateway_order_id": remote["id"],
            "amount": amount,
            "currency": self.settings.PAYMENT_CURRENCY,
            "key_id": self.gateway.key_id,
        }

    def verify(self, user: User, data: PaymentVerify) -> tuple[Order, bool]:
        order = self.orders.get_for_user(user, data.order_id)

        if order.payment_status == PaymentStatus.COMPLETED.value and order.gateway_payment_id == data.gateway_payment_id:
            return order, True
        if order.payment_status in FINALIZED_PAYMENT_STATUSES:
            raise AccessDenied("Cannot modify payment fields after payment has been completed or failed")
        # The gateway order must be the one issued for this order by create_gateway_order
        if not order.gateway_order_id or order.gateway_order_id != data.gateway_order_id:
            raise ValidationFailed("Payment does not belong to this order")
        claimed = self.db.query(Order.id).filter(
            Order.gateway_payment_id == data.gateway_payment_id,
            Order.id != order.id,
        ).first()
        if claimed:
            logger.warning(
                "Payment id already recorded on another order",
                extra={'extra_fields': {'order_id': order.id, 'gateway_payment_id': data.gateway_payment_id}}
            )
            raise ValidationFailed("Payment has already been used for another order")

        is_valid = self.gateway.verify_signature(data.gateway_order_id, data.gateway_payment_id, data.signature)
        order.gateway_order_id = data.gateway_order_id
        order.gateway_payment_id = data.gateway_payment_id
        if is_valid:
            order.payment_status = PaymentStatus.COMPLETED.value
            if order.status == OrderStatus.PENDING.value:
                order.status = OrderStatus.CONFIRMED.value
        else:
            order.payment_status = PaymentStatus.FAILED.value
        self.db.commit()
        self.db.refresh(order)

        log = logger.info if is_valid else logger.warning
        log(
            f"Payment {'verified' if is_valid else 'rejected'} for {order.order_number}",
            extra={'extra_fields': {'order_id': order.id, 'gateway_payment_id': data.gateway_payment_id}}
        )
        return order, is_valid

    def payment_status(self, user: User, order_number: str) -> Order:
        """Customer lookup by order number; other customers' orders read as missing."""
        order = self.db.query(Order).filter(
            Order.order_number == order_number,
            Order.user_id == user.id,
            Order.is_active.is_(True),
        ).first()
        if not order:
            raise OrderNotFound()
        return order
