from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.assembler import OrderAssembler
from storefront.application.schemas import OrderLineIn, ShippingAddress
from storefront.domain.errors import PriceMismatch

ADDRESS = ShippingAddress(
    first_name="Asha", last_name="Rao", phone="9876543210", email="asha@example.com",
    address_line1="12 MG Road", city="Bengaluru", state="Karnataka", pincode="560001",
)

def _line(product, quantity=2, price=500, size="M"):
    return OrderLineIn(product_id=product.id, size=size, quantity=quantity, price=price)

class TestServerPricing:
    def test_total_recomputed_from_catalog(self, settings, make_product):
        product = make_product()

        assembled = OrderAssembler(settings).assemble([(product, _line(product))], 1000)

        assert assembled.total_amount == 1000
        assert assembled.items[0].total_price == 1000

    def test_within_tolerance(self, settings, make_product):
        product = make_product()

        assembled = OrderAssembler(settings).assemble([(product, _line(product))], 1000.005)

        assert assembled.total_amount == 1000

    def test_line_price_must_match_catalog(self, settings, make_product):
        product = make_product(discount_price=450)

        with pytest.raises(PriceMismatch):
            OrderAssembler(settings).assemble([(product, _line(product))], 1000)

    def test_without_discount_actual_price_applies(self, settings, make_product):
        product = make_product(actual_price=800, discount_price=None)

        assembled = OrderAssembler(settings).assemble([(product, _line(product, price=800))], 1600)

        assert assembled.total_amount == 1600

class TestClientPricing:
    def test_client_values_stored_as_sent(self, settings, make_product):
        settings.ENFORCE_SERVER_PRICING = False
        product = make_product()

        assembled = OrderAssembler(settings).assemble([(product, _line(product, price=400))], 700)

        assert assembled.items[0].price == 400
        assert assembled.computed_total == 800
        assert assembled.total_amount == 700

def test_build_order_defaults(settings, make_product):
    product = make_product()
    assembler = OrderAssembler(settings)
    assembled = assembler.assemble([(product, _line(product))], 1000)
    now = datetime(2025, 10, 18, 10, 0, tzinfo=timezone.utc)

    order = assembler.build_order("u1", "ZNX251018001", assembled, ADDRESS, now=now)

    assert order.status == "pending"
    assert order.payment_status == "pending"
    assert order.payment_method == "razorpay"
    assert order.expected_delivery == now + timedelta(minutes=45)
    assert order.shipping_address["addressLine1"] == "12 MG Road"
    assert order.delivery_address == {
        "street": "12 MG Road", "city": "Bengaluru", "state": "Karnataka", "pincode": "560001",
    }
