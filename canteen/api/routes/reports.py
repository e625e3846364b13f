"""Report Routes — consumption reports over the order ledger.

Invariants:
    - Mode-specific parameters are passed through untouched; resolution and
      validation live in core/report_rules.py
    - Response echoes the resolved filters
"""

import logging

from fastapi import APIRouter, Depends, Query

from canteen.api.dependencies import get_report_engine
from canteen.core.domain_types import ReportMode
from canteen.core.report_rules import ReportParams
from canteen.schemas.order import OrderResponse
from canteen.schemas.report import ReportFilters, ReportResponse
from canteen.services.report_engine import ReportEngine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("", response_model=ReportResponse)
async def build_report(
    mode: ReportMode = Query(ReportMode.SINGLE_DATE),
    date: str | None = Query(None),
    month: str | None = Query(None),
    start_date: str | None = Query(None),
    end_date: str | None = Query(None),
    employer: str | None = Query(None),
    worker: str | None = Query(None),
    engine: ReportEngine = Depends(get_report_engine),
):
    report = await engine.build_report(ReportParams(
        mode=mode, date=date, month=month,
        start_date=start_date, end_date=end_date,
        employer=employer, worker_identity=worker,
    ))
    selection = report.selection
    return ReportResponse(
        orders=[
            OrderResponse.model_validate(order).model_copy(
                update={"cost_center": report.cost_centers.get(order.worker_identity)},
            )
            for order in report.orders
        ],
        summary=report.summary,
        cost_center_summary=report.cost_center_summary,
        filters=ReportFilters(
            mode=selection.mode,
            date=selection.date_equals,
            month=selection.date_prefix,
            start_date=start_date if mode == ReportMode.RANGE else selection.date_from,
            end_date=end_date if mode == ReportMode.RANGE else selection.date_to,
            employer=selection.employer,
            worker=selection.worker_identity,
        ),
    )
