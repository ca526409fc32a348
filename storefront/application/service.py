from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional

from shared.core import get_logger
from storefront.core_settings import Settings
from storefront.domain.enums import PaymentStatus
from storefront.domain.errors import (
    AccessDenied, InsufficientStock, OrderNotFound, PersistenceFailure,
    ProductNotFound, ValidationFailed,
)
from storefront.domain.models import Order, User
from .assembler import OrderAssembler
from .catalog import CatalogLookup, parse_id
from .order_numbers import OrderNumberGenerator
from .schemas import OrderCreate
from .status import (
    check_transition, parse_order_status, parse_payment_status_filter, parse_status_filter,
)
from .stock import available_stock, decrement_stock, validate_stock

logger = get_logger(__name__)

FINALIZED_PAYMENT_STATUSES = {PaymentStatus.COMPLETED.value, PaymentStatus.FAILED.value}

class OrderService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.catalog = CatalogLookup(db)
        self.assembler = OrderAssembler(settings)
        self.numbers = OrderNumberGenerator(db, settings.ORDER_NUMBER_PREFIX)

    # Creation

    def create(self, user: User, data: OrderCreate) -> Order:
        lines = []
        for line in data.items:
            try:
                product = self.catalog.get(line.product_id)
            except ProductNotFound as e:
                # A bad cart line is the client's problem, not a missing resource
                raise ValidationFailed(e.message)
            validate_stock(product, line.size.value, line.quantity)
            lines.append((product, line))

        assembled = self.assembler.assemble(lines, data.total_amount)

        try:
            order = self._persist(user, assembled, lines, data)
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("Failed to persist order", exc_info=True,
                         extra={'extra_fields': {'user_id': user.id}})
            raise PersistenceFailure()

        logger.info(
            f"Order created: {order.order_number}",
            extra={'extra_fields': {
                'order_id': order.id,
                'order_number': order.order_number,
                'total_amount': float(order.total_amount),
                'computed_total': assembled.computed_total,
                'items': len(order.items),
            }}
        )
        return order

    def _persist(self, user: User, assembled, lines, data: OrderCreate) -> Order:
        """Number, insert and decrement stock in one transaction."""
        order_number = self.numbers.next()
        order = self.assembler.build_order(user.id, order_number, assembled, data.shipping_address)
        self.db.add(order)
        self.db.flush()

        for product, line in lines:
            size = line.size.value
            if not decrement_stock(self.db, product.id, size, line.quantity):
                self.db.rollback()
                available = available_stock(self.db, product.id, size)
                logger.warning(
                    f"Stock changed while placing order for {product.title} ({size})",
                    extra={'extra_fields': {
                        'product_id': product.id,
                        'size': size,
                        'requested': line.quantity,
                        'available': available,
                    }}
                )
                raise InsufficientStock(product.title, size, line.quantity, available)

        self.db.commit()
        self.db.refresh(order)
        return order

    # Customer queries

    def list_for_user(self, user: User, page: int = 1, limit: int = 10,
                      status: Optional[str] = None) -> tuple[list[Order], int]:
        query = self.db.query(Order).filter(Order.user_id == user.id, Order.is_active.is_(True))
        status = parse_status_filter(status)
        if status:
            query = query.filter(Order.status == status)
        return self._page(query, page, limit)

    def get_for_user(self, user: User, order_id: str) -> Order:
        order = self.db.get(Order, parse_id(order_id, "order id"))
        if not order or not order.is_active:
            raise OrderNotFound()
        if order.user_id != user.id and not user.is_admin:
            logger.warning("Order access denied", extra={'extra_fields': {'order_id': order.id}})
            raise AccessDenied()
        return order

    # Admin queries and updates

    def list_all(self, page: int = 1, limit: int = 10, status: Optional[str] = None,
                 payment_status: Optional[str] = None,
                 search: Optional[str] = None) -> tuple[list[Order], int]:
        query = self.db.query(Order).filter(Order.is_active.is_(True))
        status = parse_status_filter(status)
        if status:
            query = query.filter(Order.status == status)
        payment_status = parse_payment_status_filter(payment_status)
        if payment_status:
            query = query.filter(Order.payment_status == payment_status)
        if search and search.strip():
            term = search.strip().lower()
            query = query.join(User, Order.user_id == User.id).filter(or_(
                func.lower(Order.order_number).contains(term, autoescape=True),
                func.lower(User.name).contains(term, autoescape=True),
                func.lower(User.email).contains(term, autoescape=True),
            ))
        return self._page(query, page, limit)

    def get(self, order_id: str) -> Order:
        """Admin fetch; soft-deleted orders stay visible here."""
        order = self.db.get(Order, parse_id(order_id, "order id"))
        if not order:
            raise OrderNotFound()
        return order

    def update_status(self, order_id: str, status: str) -> Order:
        new_status = parse_order_status(status)
        order = self.get(order_id)
        if not order.is_active:
            raise OrderNotFound()
        previous = order.status
        check_transition(previous, new_status, self.settings.ENFORCE_STATUS_TRANSITIONS)

        order.status = new_status
        self.db.commit()
        self.db.refresh(order)
        logger.info(
            f"Order {order.order_number} status updated to {new_status}",
            extra={'extra_fields': {'order_id': order.id, 'from': previous, 'to': new_status}}
        )
        return order

    def deactivate(self, order_id: str) -> Order:
        order = self.get(order_id)
        if order.payment_status in FINALIZED_PAYMENT_STATUSES:
            raise AccessDenied("Cannot delete order after payment has been completed or failed")
        order.is_active = False
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order.order_number} deactivated", extra={'extra_fields': {'order_id': order.id}})
        return order

    def _page(self, query, page: int, limit: int) -> tuple[list[Order], int]:
        total = query.count()
        orders = (
            query.order_by(Order.created_at.desc(), Order.order_number.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return orders, total
