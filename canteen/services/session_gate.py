"""Session Gate — opaque admin tokens with absolute expiry.

Invariants:
    - issue() stores a random token expiring now + ttl_seconds
    - verify() first purges EVERY expired record, then checks the token;
      unknown or expired tokens are never valid
    - destroy() is idempotent
    - No background sweep: expired rows are reclaimed on the next verify()
"""

import logging
import secrets

from sqlalchemy import delete, select

from canteen.core.clock import Clock, SystemClock
from canteen.infrastructure.database import DatabaseSessionManager
from canteen.models.admin_session import AdminSession

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60 * 24


class SessionGate:
    """Issues, verifies and destroys admin session tokens."""

    def __init__(
        self,
        db_manager: DatabaseSessionManager,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Clock | None = None,
    ):
        self._db = db_manager
        self._ttl = ttl_seconds
        self._clock = clock or SystemClock()

    def _now_epoch(self) -> int:
        return int(self._clock.now().timestamp())

    async def issue(self) -> str:
        token = secrets.token_urlsafe(32)
        async with self._db.session() as db:
            db.add(AdminSession(token=token, expires_at=self._now_epoch() + self._ttl))
            await db.commit()
        logger.info("Admin session issued")
        return token

    async def verify(self, token: str | None) -> bool:
        if not token:
            return False
        async with self._db.session() as db:
            purged = await db.execute(
                delete(AdminSession).where(AdminSession.expires_at < self._now_epoch()),
            )
            result = await db.execute(
                select(AdminSession.token).where(AdminSession.token == token),
            )
            valid = result.scalar_one_or_none() is not None
            await db.commit()
        if purged.rowcount:
            logger.info("Expired admin sessions purged", extra={"purged": purged.rowcount})
        return valid

    async def destroy(self, token: str | None) -> None:
        if not token:
            return
        async with self._db.session() as db:
            await db.execute(delete(AdminSession).where(AdminSession.token == token))
            await db.commit()
