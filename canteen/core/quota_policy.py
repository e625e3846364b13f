"""Quota Policy — pure admission decision for a worker's daily meal quota.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - NORMAL always orders exactly 1 and may hold 1 per day
    - PLUS orders 1 or 2 and may hold 2 per day
    - PREMIUM orders 1..premium_max_quantity, daily cap premium_daily_cap
    - Out-of-range requests collapse to 1, they are never rejected for size
    - accepted iff already_ordered + quantity <= max_daily

Design Decisions:
    - Premium bounds live in QuotaLimits so deployments can tune them;
      the defaults (50 / 999) are the historical values
"""

from dataclasses import dataclass

from canteen.core.domain_types import Tier


NORMAL_DAILY_QUOTA = 1
PLUS_DAILY_QUOTA = 2
PLUS_MAX_QUANTITY = 2
PREMIUM_MAX_QUANTITY = 50
PREMIUM_DAILY_CAP = 999


@dataclass(frozen=True)
class QuotaLimits:
    """Tunable premium bounds."""
    premium_max_quantity: int = PREMIUM_MAX_QUANTITY
    premium_daily_cap: int = PREMIUM_DAILY_CAP


DEFAULT_LIMITS = QuotaLimits()


@dataclass(frozen=True)
class QuotaDecision:
    """Outcome of admissible(). quantity is the clamped quantity to record."""
    quantity: int
    accepted: bool
    max_daily: int
    already_ordered: int


def max_daily_for(tier: Tier, limits: QuotaLimits = DEFAULT_LIMITS) -> int:
    """Daily quota derived from tier."""
    if tier == Tier.PREMIUM:
        return limits.premium_daily_cap
    if tier == Tier.PLUS:
        return PLUS_DAILY_QUOTA
    return NORMAL_DAILY_QUOTA


def clamp_quantity(
    tier: Tier, requested: int | None, limits: QuotaLimits = DEFAULT_LIMITS,
) -> int:
    """Force the requested quantity into the tier's legal range (fallback 1)."""
    if tier == Tier.PREMIUM:
        upper = limits.premium_max_quantity
    elif tier == Tier.PLUS:
        upper = PLUS_MAX_QUANTITY
    else:
        return 1
    if requested is None or not 1 <= requested <= upper:
        return 1
    return requested


def admissible(
    tier: Tier,
    already_ordered: int,
    requested: int | None,
    limits: QuotaLimits = DEFAULT_LIMITS,
) -> QuotaDecision:
    """Decide whether a worker may order `requested` more meals today."""
    max_daily = max_daily_for(tier, limits)
    quantity = clamp_quantity(tier, requested, limits)
    return QuotaDecision(
        quantity=quantity,
        accepted=already_ordered + quantity <= max_daily,
        max_daily=max_daily,
        already_ordered=already_ordered,
    )
