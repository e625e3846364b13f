"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - IdentityKey is always the normalized form (see core/identity.py)
    - TicketId is 8 characters from [A-Z0-9]
    - Tier values are mutually exclusive; NORMAL is the default
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to VARCHAR columns without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

IdentityKey = NewType("IdentityKey", str)
TicketId = NewType("TicketId", str)
DateStr = NewType("DateStr", str)           # YYYY-MM-DD in the business zone


# ─── Enums ───────────────────────────────────────────────────────

class Tier(str, Enum):
    """Worker classification — determines daily quota and legal quantity range."""
    NORMAL = "NORMAL"
    PLUS = "PLUS"
    PREMIUM = "PREMIUM"


class FulfillmentMode(str, Enum):
    """How the meal is handed over."""
    DINE_IN = "DINE_IN"
    TAKEAWAY = "TAKEAWAY"


class MealSlot(str, Enum):
    """Meal the voucher is valid for."""
    LUNCH = "LUNCH"
    DINNER = "DINNER"


class ReportMode(str, Enum):
    """The report query modes. BY_WORKER is ALL_HISTORY narrowed to one worker."""
    SINGLE_DATE = "single-date"
    MONTH = "month"
    LAST_7_DAYS = "last-7-days"
    RANGE = "range"
    ALL_HISTORY = "all-history"
    BY_WORKER = "by-worker"


# ─── Constants ───────────────────────────────────────────────────

TICKET_ID_LENGTH = 8
TICKET_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

DEFAULT_BUSINESS_TIMEZONE = "America/Santiago"

# Pickup grid: every half hour from 11:00 to 23:00 inclusive
PICKUP_TIME_SLOTS: tuple[str, ...] = tuple(
    f"{minutes // 60:02d}:{minutes % 60:02d}"
    for minutes in range(11 * 60, 23 * 60 + 1, 30)
)

TOTAL_KEY = "TOTAL"
UNCATEGORIZED_COST_CENTER = "UNCATEGORIZED"
ALL_EMPLOYERS_SENTINELS = frozenset({"ALL", "TODAS"})
