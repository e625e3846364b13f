"""DailyTally ORM — per-worker-per-day quantity accumulator, the quota lock row.

Invariants:
    - (identity_key, date_str) is the primary key: one row per worker per day
    - quantity == sum of the worker's order quantities for that day
    - Admission locks this row (SELECT ... FOR UPDATE) before reading it and
      increments it with a guarded UPDATE in the same transaction
"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from canteen.db.base import Base


class DailyTally(Base):
    __tablename__ = "daily_tallies"

    identity_key: Mapped[str] = mapped_column(String(32), primary_key=True)
    date_str: Mapped[str] = mapped_column(String(10), primary_key=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
