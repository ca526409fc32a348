from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from shared.core import get_logger
from storefront.core_settings import Settings
from storefront.domain.enums import OrderStatus, PaymentStatus
from storefront.domain.errors import PriceMismatch
from storefront.domain.models import Order, OrderItem, Product, utc_now
from .schemas import OrderLineIn, ShippingAddress

logger = get_logger(__name__)

@dataclass
class AssembledOrder:
    items: list[OrderItem] = field(default_factory=list)
    # Amount stored on the order
    total_amount: float = 0.0
    # Sum of line totals as computed here
    computed_total: float = 0.0

class OrderAssembler:
    """
    Builds the immutable item snapshots and the order document.

    With ``ENFORCE_SERVER_PRICING`` every line must be charged at the
    catalog's final price and the stored total is recomputed here. Without
    it the client's prices and total are stored as sent.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _same_amount(self, a: float, b: float) -> bool:
        return abs(a - b) <= self.settings.PRICE_TOLERANCE

    def unit_price(self, product: Product, line: OrderLineIn) -> float:
        if not self.settings.ENFORCE_SERVER_PRICING:
            return line.price
        if not self._same_amount(line.price, product.final_price):
            logger.warning(
                f"Price mismatch for {product.title}",
                extra={'extra_fields': {
                    'product_id': product.id,
                    'client_price': line.price,
                    'catalog_price': product.final_price,
                }}
            )
            raise PriceMismatch(f"Price for {product.title} has changed to {product.final_price:.2f}")
        return product.final_price

    def snapshot(self, product: Product, line: OrderLineIn) -> OrderItem:
        price = self.unit_price(product, line)
        return OrderItem(
            product_id=product.id,
            product_title=product.title,
            product_image=product.primary_image,
            product_brand=product.brand,
            size=line.size.value,
            quantity=line.quantity,
            price=price,
            total_price=round(price * line.quantity, 2),
        )

    def assemble(self, lines: list[tuple[Product, OrderLineIn]], client_total: float) -> AssembledOrder:
        assembled = AssembledOrder(items=[self.snapshot(product, line) for product, line in lines])
        assembled.computed_total = round(sum(float(item.total_price) for item in assembled.items), 2)

        if self.settings.ENFORCE_SERVER_PRICING:
            if not self._same_amount(client_total, assembled.computed_total):
                raise PriceMismatch(
                    f"Order total {client_total:.2f} does not match item total {assembled.computed_total:.2f}"
                )
            assembled.total_amount = assembled.computed_total
        else:
            if not self._same_amount(client_total, assembled.computed_total):
                logger.warning(
                    "Client total differs from computed total",
                    extra={'extra_fields': {
                        'client_total': client_total,
                        'computed_total': assembled.computed_total,
                    }}
                )
            assembled.total_amount = client_total
        return assembled

    def build_order(
        self,
        user_id: str,
        order_number: str,
        assembled: AssembledOrder,
        address: ShippingAddress,
        now: Optional[datetime] = None,
    ) -> Order:
        now = now or utc_now()
        shipping = address.model_dump(by_alias=True)
        return Order(
            user_id=user_id,
            order_number=order_number,
            items=assembled.items,
            total_amount=assembled.total_amount,
            shipping_address=shipping,
            delivery_address={
                "street": address.address_line1,
                "city": address.city,
                "state": address.state,
                "pincode": address.pincode,
            },
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            payment_method=self.settings.DEFAULT_PAYMENT_METHOD,
            expected_delivery=now + timedelta(minutes=self.settings.EXPECTED_DELIVERY_MINUTES),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
