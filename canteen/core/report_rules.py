"""Report Rules — pure resolution of a report request and folding of its orders.

Invariants:
    - resolve_selection never raises for malformed dates: range degrades to an
      empty selection, as does a malformed month;
      a malformed single date simply matches nothing
    - A worker filter is only legal with ALL_HISTORY / BY_WORKER
    - fold_orders visits each order once; quantity defaults to 1
    - summary always holds TOTAL_KEY (first key); cost centers are trimmed,
      upper-cased, and blank/missing ones go to UNCATEGORIZED_COST_CENTER
    - Same inputs in the same order -> identical output dicts (key order included)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Protocol
from zoneinfo import ZoneInfo

from canteen.core.business_calendar import (
    days_before, is_date_str, is_month_str, local_date_str, local_month_str,
)
from canteen.core.domain_types import (
    ReportMode, ALL_EMPLOYERS_SENTINELS, TOTAL_KEY, UNCATEGORIZED_COST_CENTER,
)
from canteen.core.errors import InvalidParametersError
from canteen.core.identity import normalize_identity_key

LAST_DAYS_WINDOW = 7


@dataclass(frozen=True)
class ReportParams:
    """Caller-supplied report request, already split into fields."""
    mode: ReportMode
    date: str | None = None
    month: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    employer: str | None = None
    worker_identity: str | None = None


@dataclass(frozen=True)
class ReportSelection:
    """Store-agnostic description of which orders a report covers."""
    mode: ReportMode
    date_equals: str | None = None
    date_prefix: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    employer: str | None = None
    worker_identity: str | None = None
    order_by_date: bool = False
    empty: bool = False


class FoldableOrder(Protocol):
    worker_identity: str
    company: str
    quantity: int | None


@dataclass(frozen=True)
class ReportSummaries:
    summary: dict[str, int]
    cost_center_summary: dict[str, int]


def normalize_employer_filter(employer: str | None) -> str | None:
    """None when the filter is absent or the 'all employers' sentinel."""
    if employer is None:
        return None
    cleaned = employer.strip().upper()
    if not cleaned or cleaned in ALL_EMPLOYERS_SENTINELS:
        return None
    return cleaned


def resolve_selection(
    params: ReportParams, now: datetime, zone: ZoneInfo,
) -> ReportSelection:
    """Turn one of the report modes into a ReportSelection."""
    mode = params.mode
    employer = normalize_employer_filter(params.employer)
    worker = (
        normalize_identity_key(params.worker_identity)
        if params.worker_identity else None
    ) or None

    if worker and mode not in (ReportMode.ALL_HISTORY, ReportMode.BY_WORKER):
        raise InvalidParametersError(
            "Worker filter is only valid with all-history reports",
            field="worker",
        )
    if mode == ReportMode.BY_WORKER and not worker:
        raise InvalidParametersError(
            "by-worker reports require a worker identity", field="worker",
        )

    if mode == ReportMode.SINGLE_DATE:
        return ReportSelection(
            mode, date_equals=params.date or local_date_str(now, zone),
            employer=employer,
        )
    if mode == ReportMode.MONTH:
        month = params.month or local_month_str(now, zone)
        if not is_month_str(month):
            return ReportSelection(mode, employer=employer, empty=True)
        return ReportSelection(mode, date_prefix=month, employer=employer)
    if mode == ReportMode.LAST_7_DAYS:
        return ReportSelection(
            mode, date_from=days_before(now, zone, LAST_DAYS_WINDOW),
            employer=employer,
        )
    if mode == ReportMode.RANGE:
        start, end = params.start_date, params.end_date
        if not (is_date_str(start) and is_date_str(end)) or start > end:
            return ReportSelection(mode, employer=employer, order_by_date=True, empty=True)
        return ReportSelection(
            mode, date_from=start, date_to=end,
            employer=employer, order_by_date=True,
        )
    return ReportSelection(mode, employer=employer, worker_identity=worker)


def cost_center_bucket(cost_center: str | None) -> str:
    """Normalized cost-center label for grouping."""
    if cost_center is None:
        return UNCATEGORIZED_COST_CENTER
    cleaned = cost_center.strip().upper()
    return cleaned or UNCATEGORIZED_COST_CENTER


def fold_orders(
    orders: Iterable[FoldableOrder], cost_centers: Mapping[str, str | None],
) -> ReportSummaries:
    """Single pass: per-employer totals (+TOTAL) and per-cost-center totals."""
    summary: dict[str, int] = {TOTAL_KEY: 0}
    by_cost_center: dict[str, int] = {}
    for order in orders:
        qty = order.quantity or 1
        summary[order.company] = summary.get(order.company, 0) + qty
        summary[TOTAL_KEY] += qty
        bucket = cost_center_bucket(cost_centers.get(order.worker_identity))
        by_cost_center[bucket] = by_cost_center.get(bucket, 0) + qty
    return ReportSummaries(summary=summary, cost_center_summary=by_cost_center)
