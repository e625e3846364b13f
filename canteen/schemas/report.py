"""Report Schemas — query echo and the report body."""

from pydantic import BaseModel

from canteen.core.domain_types import ReportMode
from canteen.schemas.order import OrderResponse


class ReportFilters(BaseModel):
    """Resolved filters, echoed back so the caller can label the report."""
    mode: ReportMode
    date: str | None = None
    month: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    employer: str | None = None
    worker: str | None = None


class ReportResponse(BaseModel):
    orders: list[OrderResponse]
    summary: dict[str, int]
    cost_center_summary: dict[str, int]
    filters: ReportFilters
