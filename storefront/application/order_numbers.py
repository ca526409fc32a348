from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite
from datetime import datetime
from typing import Optional

from storefront.domain.models import OrderCounter

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

def format_order_number(prefix: str, when: datetime, sequence: int) -> str:
    """ZNX + YYMMDD + day sequence, padded to at least 3 digits (ZNX251018007)."""
    return f"{prefix}{when:%y%m%d}{sequence:03d}"

class OrderNumberGenerator:
    """
    Per-day sequence backed by an ``order_counters`` row.

    Must run inside the transaction that inserts the order: the increment
    locks the day's row until commit, so concurrent orders queue on it and a
    rolled-back order gives its number back.
    """

    def __init__(self, db: Session, prefix: str = "ZNX"):
        self.db = db
        self.prefix = prefix

    def next(self, now: Optional[datetime] = None) -> str:
        # Server local date, matching what customers see on their receipts
        now = now or datetime.now()
        day = f"{now:%y%m%d}"
        self._ensure_counter(day)
        self.db.query(OrderCounter).filter(OrderCounter.day == day).update(
            {OrderCounter.value: OrderCounter.value + 1},
            synchronize_session=False,
        )
        sequence = self.db.query(OrderCounter.value).filter(OrderCounter.day == day).scalar()
        return format_order_number(self.prefix, now, sequence)

    def _ensure_counter(self, day: str) -> None:
        dialect = self.db.get_bind().dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Order counters are not supported on {dialect}")
        self.db.execute(
            insert(OrderCounter)
            .values(day=day, value=0)
            .on_conflict_do_nothing(index_elements=[OrderCounter.day])
        )
