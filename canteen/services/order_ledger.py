"""Order Ledger — order persistence plus the per-worker-per-day quota tally.

Invariants:
    - Orders are only ever inserted, flagged as printed, or deleted
    - daily_tallies.quantity mirrors the sum of a worker's quantities for a day;
      append/delete callers keep it in step inside the same transaction
    - lock_daily_tally returns the tally with its row locked (FOR UPDATE) for
      the rest of the transaction; the row is created on first use, seeded
      from the orders already on file
    - reserve_quantity is a single guarded UPDATE: it never lets the tally
      exceed max_daily, even without the row lock
    - Concurrent first-use inserts of a tally row roll back only their SAVEPOINT

Design Decisions:
    - Locked counter row over SUM-then-INSERT: the read-decide-write sequence is
      serialized per (worker, date) instead of racing on a stale aggregate
"""

import logging
from typing import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.core.domain_types import DateStr, IdentityKey, TicketId
from canteen.core.errors import TicketCollisionError
from canteen.core.report_rules import ReportSelection
from canteen.models.daily_tally import DailyTally
from canteen.models.order import Order

logger = logging.getLogger(__name__)


class SqlOrderLedger:
    """OrderLedger backed by the orders and daily_tallies tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Quota tally ─────────────────────────────────────────────

    async def sum_quantity_for(self, key: IdentityKey, date_str: DateStr) -> int:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Order.quantity), 0))
            .where(Order.worker_identity == key)
            .where(Order.date_str == date_str),
        )
        return int(result.scalar_one())

    async def _locked_tally(
        self, key: IdentityKey, date_str: DateStr,
    ) -> DailyTally | None:
        result = await self.db.execute(
            select(DailyTally)
            .where(DailyTally.identity_key == key)
            .where(DailyTally.date_str == date_str)
            .with_for_update()
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def lock_daily_tally(self, key: IdentityKey, date_str: DateStr) -> int:
        """Lock (creating if needed) the tally row and return its quantity."""
        tally = await self._locked_tally(key, date_str)
        if tally is None:
            seed = await self.sum_quantity_for(key, date_str)
            try:
                async with self.db.begin_nested():
                    self.db.add(DailyTally(
                        identity_key=key, date_str=date_str, quantity=seed,
                    ))
            except IntegrityError:
                logger.debug(
                    "Tally row created concurrently, re-reading",
                    extra={"identity_key": key, "date_str": date_str},
                )
            tally = await self._locked_tally(key, date_str)
            if tally is None:
                raise RuntimeError(f"tally row for {key}/{date_str} vanished")
        return tally.quantity

    async def reserve_quantity(
        self, key: IdentityKey, date_str: DateStr, quantity: int, max_daily: int,
    ) -> bool:
        """Add `quantity` to the tally only if the result stays within max_daily."""
        result = await self.db.execute(
            update(DailyTally)
            .where(DailyTally.identity_key == key)
            .where(DailyTally.date_str == date_str)
            .where(DailyTally.quantity + quantity <= max_daily)
            .values(quantity=DailyTally.quantity + quantity)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1

    async def release_quantity(
        self, key: IdentityKey, date_str: DateStr, quantity: int,
    ) -> None:
        """Give back quantity from a deleted order (never below zero)."""
        current = await self.lock_daily_tally(key, date_str)
        await self.db.execute(
            update(DailyTally)
            .where(DailyTally.identity_key == key)
            .where(DailyTally.date_str == date_str)
            .values(quantity=max(current - quantity, 0))
            .execution_options(synchronize_session=False),
        )

    # ─── Orders ──────────────────────────────────────────────────

    async def append(self, order: Order) -> TicketId:
        """Insert one order. A taken ticket id raises TicketCollisionError."""
        try:
            async with self.db.begin_nested():
                self.db.add(order)
        except IntegrityError:
            raise TicketCollisionError(attempts=1)
        return TicketId(order.id)

    async def get(self, ticket_id: str) -> Order | None:
        result = await self.db.execute(select(Order).where(Order.id == ticket_id))
        return result.scalar_one_or_none()

    async def query(self, selection: ReportSelection) -> Sequence[Order]:
        """Orders matching the selection, in report order."""
        if selection.empty:
            return []
        stmt = select(Order)
        if selection.date_equals is not None:
            stmt = stmt.where(Order.date_str == selection.date_equals)
        if selection.date_prefix is not None:
            stmt = stmt.where(
                Order.date_str.startswith(selection.date_prefix, autoescape=True),
            )
        if selection.date_from is not None:
            stmt = stmt.where(Order.date_str >= selection.date_from)
        if selection.date_to is not None:
            stmt = stmt.where(Order.date_str <= selection.date_to)
        if selection.employer is not None:
            stmt = stmt.where(func.upper(Order.company) == selection.employer)
        if selection.worker_identity is not None:
            stmt = stmt.where(Order.worker_identity == selection.worker_identity)

        if selection.order_by_date:
            stmt = stmt.order_by(
                Order.date_str.desc(), Order.created_at.desc(), Order.id.desc(),
            )
        else:
            stmt = stmt.order_by(Order.created_at.desc(), Order.id.desc())

        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def update_printed_flag(self, ticket_id: str, printed: bool) -> int:
        result = await self.db.execute(
            update(Order)
            .where(Order.id == ticket_id)
            .values(printed=printed)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount

    async def delete(self, ticket_id: str) -> int:
        result = await self.db.execute(delete(Order).where(Order.id == ticket_id))
        return result.rowcount
