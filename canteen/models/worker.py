"""Worker ORM — directory record of an identified worker.

Invariants:
    - identity_key is unique, normalized, and never updated after creation
    - tier is one of Tier (NORMAL | PLUS | PREMIUM), default NORMAL
    - company is a plain name reference, not a foreign key
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from canteen.core.domain_types import Tier
from canteen.db.base import Base


class Worker(Base):
    """Worker entity — identity, employer, optional cost center, tier."""
    __tablename__ = "workers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identity_key: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    cost_center: Mapped[str | None] = mapped_column(String(200), nullable=True)
    tier: Mapped[str] = mapped_column(
        String(10), nullable=False, default=Tier.NORMAL.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def tier_enum(self) -> Tier:
        return Tier(self.tier)
