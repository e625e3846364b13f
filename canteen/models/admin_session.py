"""AdminSession ORM — opaque admin token with absolute expiry.

Invariants:
    - token is random and unguessable (primary key)
    - expires_at is epoch seconds; a row with expires_at < now is dead and
      is purged on the next verification
"""

from datetime import datetime, timezone

from sqlalchemy import String, BigInteger, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from canteen.db.base import Base


class AdminSession(Base):
    __tablename__ = "admin_sessions"

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
