"""Report Rules — mode resolution and the single-pass summary fold.

Tests:
    - Each mode resolves to the expected date predicate
    - Malformed range bounds degrade to an empty selection
    - Worker filter legality per mode
    - Summaries: TOTAL always present, UNCATEGORIZED bucket, quantity default 1
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from canteen.core.business_calendar import business_zone
from canteen.core.domain_types import ReportMode
from canteen.core.errors import InvalidParametersError
from canteen.core.report_rules import (
    ReportParams, cost_center_bucket, fold_orders,
    normalize_employer_filter, resolve_selection,
)

ZONE = business_zone("America/Santiago")
NOW = datetime(2026, 7, 15, 16, 0, tzinfo=timezone.utc)


@dataclass
class _Row:
    worker_identity: str
    company: str
    quantity: int | None = 1


# ─── resolve_selection ───────────────────────────────────────────

def test_single_date_defaults_to_today():
    sel = resolve_selection(ReportParams(ReportMode.SINGLE_DATE), NOW, ZONE)
    assert sel.date_equals == "2026-07-15"
    assert not sel.order_by_date


def test_single_date_uses_given_date():
    sel = resolve_selection(
        ReportParams(ReportMode.SINGLE_DATE, date="2026-07-01"), NOW, ZONE,
    )
    assert sel.date_equals == "2026-07-01"


def test_month_defaults_to_current_month():
    sel = resolve_selection(ReportParams(ReportMode.MONTH), NOW, ZONE)
    assert sel.date_prefix == "2026-07"


@pytest.mark.parametrize("month", ["2", "2026-7", "2026-13"])
def test_malformed_month_is_empty(month):
    sel = resolve_selection(ReportParams(ReportMode.MONTH, month=month), NOW, ZONE)
    assert sel.empty


def test_last_seven_days_lower_bound():
    sel = resolve_selection(ReportParams(ReportMode.LAST_7_DAYS), NOW, ZONE)
    assert sel.date_from == "2026-07-08"
    assert sel.date_to is None


def test_range_orders_by_date():
    sel = resolve_selection(
        ReportParams(ReportMode.RANGE, start_date="2026-07-01", end_date="2026-07-10"),
        NOW, ZONE,
    )
    assert (sel.date_from, sel.date_to) == ("2026-07-01", "2026-07-10")
    assert sel.order_by_date
    assert not sel.empty


@pytest.mark.parametrize("start,end", [
    (None, "2026-07-10"),
    ("2026-07-01", None),
    ("2026-07-xx", "2026-07-10"),
    ("2026-07-10", "2026-07-01"),
])
def test_range_with_bad_bounds_is_empty(start, end):
    sel = resolve_selection(
        ReportParams(ReportMode.RANGE, start_date=start, end_date=end), NOW, ZONE,
    )
    assert sel.empty


def test_all_history_accepts_normalized_worker():
    sel = resolve_selection(
        ReportParams(ReportMode.ALL_HISTORY, worker_identity="12.345.678-k"),
        NOW, ZONE,
    )
    assert sel.worker_identity == "12345678K"
    assert sel.date_equals is None and sel.date_from is None


def test_worker_filter_rejected_outside_all_history():
    with pytest.raises(InvalidParametersError):
        resolve_selection(
            ReportParams(ReportMode.SINGLE_DATE, worker_identity="1"), NOW, ZONE,
        )


def test_by_worker_requires_worker():
    with pytest.raises(InvalidParametersError):
        resolve_selection(ReportParams(ReportMode.BY_WORKER), NOW, ZONE)


@pytest.mark.parametrize("raw,expected", [
    (None, None), ("", None), ("ALL", None), ("todas", None),
    (" acme ", "ACME"),
])
def test_employer_filter_normalization(raw, expected):
    assert normalize_employer_filter(raw) == expected


# ─── fold_orders ─────────────────────────────────────────────────

def test_empty_fold_has_only_total():
    folded = fold_orders([], {})
    assert folded.summary == {"TOTAL": 0}
    assert folded.cost_center_summary == {}


def test_fold_sums_per_employer_and_cost_center():
    rows = [
        _Row("W1", "ACME", 1),
        _Row("W2", "ACME", 2),
        _Row("W3", "GLOBEX", None),
    ]
    folded = fold_orders(rows, {"W1": "ops", "W2": " OPS ", "W3": None})
    assert folded.summary == {"TOTAL": 4, "ACME": 3, "GLOBEX": 1}
    assert folded.cost_center_summary == {"OPS": 3, "UNCATEGORIZED": 1}


def test_fold_is_deterministic():
    rows = [_Row("W1", "ACME"), _Row("W2", "GLOBEX")]
    first = fold_orders(rows, {"W1": "A"})
    second = fold_orders(rows, {"W1": "A"})
    assert list(first.summary.items()) == list(second.summary.items())


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank_cost_center_bucket(raw):
    assert cost_center_bucket(raw) == "UNCATEGORIZED"
