from datetime import datetime

from storefront.application.order_numbers import OrderNumberGenerator, format_order_number
from storefront.domain.models import OrderCounter

def test_format_pads_sequence_to_three_digits():
    assert format_order_number("ZNX", datetime(2025, 10, 18), 7) == "ZNX251018007"
    assert format_order_number("ZNX", datetime(2025, 10, 18), 1234) == "ZNX2510181234"

def test_sequence_increments_within_a_day(db):
    generator = OrderNumberGenerator(db)
    now = datetime(2025, 10, 18, 9, 30)

    numbers = [generator.next(now) for _ in range(3)]
    db.commit()

    assert numbers == ["ZNX251018001", "ZNX251018002", "ZNX251018003"]

def test_sequence_restarts_each_day(db):
    generator = OrderNumberGenerator(db)

    generator.next(datetime(2025, 10, 18, 23, 59))
    generator.next(datetime(2025, 10, 18, 23, 59))
    first_of_next_day = generator.next(datetime(2025, 10, 19, 0, 1))

    assert first_of_next_day == "ZNX251019001"

def test_rolled_back_number_is_reused(db):
    generator = OrderNumberGenerator(db)
    now = datetime(2025, 10, 18, 12, 0)

    generator.next(now)
    db.rollback()

    assert generator.next(now) == "ZNX251018001"

def test_counter_survives_across_sessions(session_factory):
    now = datetime(2025, 10, 18, 12, 0)
    with session_factory() as first:
        OrderNumberGenerator(first).next(now)
        first.commit()

    with session_factory() as second:
        assert OrderNumberGenerator(second).next(now) == "ZNX251018002"
        second.commit()
        assert second.get(OrderCounter, "251018").value == 2

def test_custom_prefix(db):
    assert OrderNumberGenerator(db, prefix="TST").next(datetime(2025, 1, 2)) == "TST250102001"
