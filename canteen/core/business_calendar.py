"""Business Calendar — day-boundary math in one fixed business time zone.

Invariants:
    - Every calendar date string (YYYY-MM-DD) is computed in the business zone,
      never in UTC, so 23:30 local lands on the local day
    - All functions are PURE: the instant and the zone are passed in
    - is_date_str/is_month_str only accept real calendar values
"""

from datetime import date, datetime, timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo

from canteen.core.domain_types import DateStr


@lru_cache
def business_zone(name: str) -> ZoneInfo:
    """Resolve (and cache) an IANA zone. Raises ZoneInfoNotFoundError if unknown."""
    return ZoneInfo(name)


def local_date_str(instant: datetime, zone: ZoneInfo) -> DateStr:
    """Calendar date of `instant` in the business zone."""
    return DateStr(instant.astimezone(zone).strftime("%Y-%m-%d"))


def local_time_str(instant: datetime, zone: ZoneInfo) -> str:
    """Wall-clock HH:MM of `instant` in the business zone."""
    return instant.astimezone(zone).strftime("%H:%M")


def local_month_str(instant: datetime, zone: ZoneInfo) -> str:
    return instant.astimezone(zone).strftime("%Y-%m")


def days_before(instant: datetime, zone: ZoneInfo, days: int) -> DateStr:
    """Local calendar date `days` days before the local day of `instant`."""
    local_day = instant.astimezone(zone).date()
    return DateStr((local_day - timedelta(days=days)).isoformat())


def is_date_str(value: str | None) -> bool:
    """True for a valid YYYY-MM-DD calendar date."""
    if not value or len(value) != 10:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_month_str(value: str | None) -> bool:
    """True for a valid YYYY-MM month."""
    if not value or len(value) != 7:
        return False
    return is_date_str(f"{value}-01")
