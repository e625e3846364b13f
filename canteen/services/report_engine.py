"""Report Aggregation Engine — one report mode in, ordered orders + summaries out.

Invariants:
    - One unit of work per report; a store failure fails the whole report
      (StorageUnavailableError), never a partial one
    - Cost centers come from the CURRENT worker records, resolved at read time
    - Same parameters against an unchanged ledger -> identical output
"""

import logging
from dataclasses import dataclass
from typing import Callable, Sequence
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from canteen.core.clock import Clock, SystemClock
from canteen.core.report_rules import (
    ReportParams, ReportSelection, fold_orders, resolve_selection,
)
from canteen.core.repository_protocols import OrderLedger, WorkerDirectory
from canteen.infrastructure.database import DatabaseSessionManager
from canteen.models.order import Order
from canteen.services.order_ledger import SqlOrderLedger
from canteen.services.worker_directory import SqlWorkerDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Report:
    selection: ReportSelection
    orders: Sequence[Order]
    cost_centers: dict[str, str | None]
    summary: dict[str, int]
    cost_center_summary: dict[str, int]


class ReportEngine:
    """Builds consumption reports from the order ledger."""

    def __init__(
        self,
        db_manager: DatabaseSessionManager,
        zone: ZoneInfo,
        clock: Clock | None = None,
        directory_factory: Callable[[AsyncSession], WorkerDirectory] = SqlWorkerDirectory,
        ledger_factory: Callable[[AsyncSession], OrderLedger] = SqlOrderLedger,
    ):
        self._db = db_manager
        self._zone = zone
        self._clock = clock or SystemClock()
        self._directory_factory = directory_factory
        self._ledger_factory = ledger_factory

    async def build_report(self, params: ReportParams) -> Report:
        selection = resolve_selection(params, self._clock.now(), self._zone)
        async with self._db.session() as db:
            orders = await self._ledger_factory(db).query(selection)
            cost_centers = await self._directory_factory(db).cost_centers_for(
                o.worker_identity for o in orders
            )
        folded = fold_orders(orders, cost_centers)
        logger.info(
            f"Report built with {len(orders)} orders",
            extra={"mode": selection.mode.value},
        )
        return Report(
            selection=selection,
            orders=orders,
            cost_centers=cost_centers,
            summary=folded.summary,
            cost_center_summary=folded.cost_center_summary,
        )
