"""Quota Policy — verifies tier limits, clamping and the admission decision.

Tests:
    - Daily maximum per tier (PREMIUM bounds come from QuotaLimits)
    - Out-of-range quantities collapse to 1, never rejected for size
    - accepted iff already_ordered + quantity <= max_daily
"""

import pytest

from canteen.core.domain_types import Tier
from canteen.core.quota_policy import (
    QuotaLimits, admissible, clamp_quantity, max_daily_for,
)


def test_max_daily_per_tier():
    assert max_daily_for(Tier.NORMAL) == 1
    assert max_daily_for(Tier.PLUS) == 2
    assert max_daily_for(Tier.PREMIUM) == 999


def test_premium_cap_is_tunable():
    limits = QuotaLimits(premium_max_quantity=10, premium_daily_cap=20)
    assert max_daily_for(Tier.PREMIUM, limits) == 20
    assert clamp_quantity(Tier.PREMIUM, 10, limits) == 10
    assert clamp_quantity(Tier.PREMIUM, 11, limits) == 1


@pytest.mark.parametrize("requested", [None, 0, 1, 2, 5, -3])
def test_normal_always_orders_one(requested):
    assert clamp_quantity(Tier.NORMAL, requested) == 1


@pytest.mark.parametrize("requested,expected", [
    (None, 1), (1, 1), (2, 2), (3, 1), (0, 1),
])
def test_plus_quantity_range(requested, expected):
    assert clamp_quantity(Tier.PLUS, requested) == expected


@pytest.mark.parametrize("requested,expected", [
    (30, 30), (50, 50), (60, 1), (0, 1), (None, 1),
])
def test_premium_quantity_range(requested, expected):
    assert clamp_quantity(Tier.PREMIUM, requested) == expected


def test_normal_first_order_accepted():
    decision = admissible(Tier.NORMAL, 0, None)
    assert decision.accepted
    assert decision.quantity == 1
    assert decision.max_daily == 1


def test_normal_second_order_rejected():
    decision = admissible(Tier.NORMAL, 1, 1)
    assert not decision.accepted
    assert decision.max_daily == 1
    assert decision.already_ordered == 1


def test_plus_two_then_one_rejected():
    assert admissible(Tier.PLUS, 0, 2).accepted
    decision = admissible(Tier.PLUS, 2, 1)
    assert not decision.accepted
    assert decision.max_daily == 2


def test_plus_one_then_one_accepted():
    assert admissible(Tier.PLUS, 1, 1).accepted


def test_premium_near_cap():
    assert admissible(Tier.PREMIUM, 949, 50).accepted
    assert not admissible(Tier.PREMIUM, 950, 50).accepted
