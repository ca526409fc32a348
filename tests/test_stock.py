import pytest

from conftest import stock_of
from storefront.application.stock import available_stock, decrement_stock, validate_stock
from storefront.domain.errors import InsufficientStock, ProductUnavailable
from storefront.domain.models import SizeStock

class TestValidateStock:
    def test_enough_stock(self, make_product):
        product = make_product(stock={"M": 5, "L": 0})

        assert validate_stock(product, "M", 5).stock == 5

    def test_short_stock_reports_available(self, make_product):
        product = make_product(stock={"M": 1})

        with pytest.raises(InsufficientStock) as exc:
            validate_stock(product, "M", 2)

        assert exc.value.available == 1
        assert exc.value.message == "Insufficient stock for Linen Shirt in size M"

    def test_size_match_is_exact(self, make_product):
        product = make_product(stock={"XL": 5})

        with pytest.raises(InsufficientStock) as exc:
            validate_stock(product, "xl", 1)

        assert exc.value.available == 0

    def test_inactive_product(self, make_product):
        product = make_product(is_active=False)

        with pytest.raises(ProductUnavailable):
            validate_stock(product, "M", 1)

    def test_unpublished_product(self, make_product):
        for status in ("draft", "archived"):
            product = make_product(status=status)

            with pytest.raises(ProductUnavailable):
                validate_stock(product, "M", 1)

class TestDecrementStock:
    def test_takes_quantity_off(self, db, make_product, session_factory):
        product = make_product(stock={"M": 5})

        assert decrement_stock(db, product.id, "M", 2) is True
        db.commit()

        assert stock_of(session_factory, product.id, "M") == 3

    def test_never_goes_negative(self, db, make_product, session_factory):
        product = make_product(stock={"M": 1})

        assert decrement_stock(db, product.id, "M", 2) is False
        db.commit()

        assert stock_of(session_factory, product.id, "M") == 1

    def test_selling_out_clears_in_stock(self, db, make_product, session_factory):
        product = make_product(stock={"M": 2})

        decrement_stock(db, product.id, "M", 2)
        db.commit()

        with session_factory() as session:
            row = session.query(SizeStock).filter_by(product_id=product.id, size="M").one()
            assert row.stock == 0
            assert row.in_stock is False

    def test_unknown_size_matches_nothing(self, db, make_product):
        product = make_product(stock={"M": 5})

        assert decrement_stock(db, product.id, "XXL", 1) is False
        assert available_stock(db, product.id, "XXL") == 0
