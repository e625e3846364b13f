"""Worker Directory — read-only worker lookups used by intake and reports.

Invariants:
    - Lookups take normalized identity keys
    - cost_centers_for resolves many workers in batched queries; unknown keys map to None
"""

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.core.domain_types import IdentityKey
from canteen.models.worker import Worker

_IN_CHUNK = 500


class SqlWorkerDirectory:
    """WorkerDirectory backed by the workers table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_identity(self, key: IdentityKey) -> Worker | None:
        result = await self.db.execute(
            select(Worker).where(Worker.identity_key == key),
        )
        return result.scalar_one_or_none()

    async def cost_center_of(self, key: IdentityKey) -> str | None:
        result = await self.db.execute(
            select(Worker.cost_center).where(Worker.identity_key == key),
        )
        return result.scalar_one_or_none()

    async def cost_centers_for(
        self, keys: Iterable[str],
    ) -> dict[str, str | None]:
        """Current cost center for each key, queried in chunks of _IN_CHUNK."""
        wanted = sorted(set(keys))
        found: dict[str, str | None] = {}
        for start in range(0, len(wanted), _IN_CHUNK):
            chunk = wanted[start:start + _IN_CHUNK]
            result = await self.db.execute(
                select(Worker.identity_key, Worker.cost_center)
                .where(Worker.identity_key.in_(chunk)),
            )
            found.update(result.tuples().all())
        return {key: found.get(key) for key in wanted}
