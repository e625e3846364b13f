"""Order ORM — one issued meal voucher (the ticket).

Invariants:
    - id is the 8-character ticket id (primary key)
    - worker_name/company are copied at admission; later worker edits
      never rewrite historical tickets
    - date_str is the business-zone calendar day, distinct from created_at
    - Only `printed` changes after creation

Design Decisions:
    - (worker_identity, date_str) indexed: quota seeding and per-day lookups
    - guest_names as JSON list: free-text names, only meaningful for quantity > 1
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from canteen.core.domain_types import MealSlot
from canteen.db.base import Base


class Order(Base):
    """Issued order — immutable except for the printed flag."""
    __tablename__ = "orders"
    __table_args__ = (
        Index("ix_orders_worker_date", "worker_identity", "date_str"),
        Index("ix_orders_date_created", "date_str", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(8), primary_key=True)
    worker_identity: Mapped[str] = mapped_column(String(32), nullable=False)
    worker_name: Mapped[str] = mapped_column(String(200), nullable=False)
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    fulfillment_mode: Mapped[str] = mapped_column(String(10), nullable=False)
    meal_slot: Mapped[str] = mapped_column(
        String(10), nullable=False, default=MealSlot.LUNCH.value,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    date_str: Mapped[str] = mapped_column(String(10), nullable=False)
    pickup_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    pickup_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    guest_names: Mapped[list | None] = mapped_column(JSON, nullable=True)
    order_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    signature: Mapped[str | None] = mapped_column(Text, nullable=True)
    printed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
