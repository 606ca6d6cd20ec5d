"""Membership tier calculation.

Business rules, evaluated top to bottom:

    spend missing or < 1,000                      -> SILVER
    spend >= 10,000 and purchase within 6 months  -> PLATINUM
    spend >= 10,000 and purchase within 12 months -> GOLD
    spend >= 1,000  and purchase within 12 months -> GOLD
    anything else                                 -> SILVER

"Within N months" uses calendar months and includes the boundary instant:
a purchase exactly 6 months ago still counts as within 6 months.
"""

import enum
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from typing import Protocol

from dateutil.relativedelta import relativedelta

GOLD_MIN_SPEND = Decimal("1000")
PLATINUM_MIN_SPEND = Decimal("10000")
PLATINUM_WINDOW_MONTHS = 6
GOLD_WINDOW_MONTHS = 12


class MembershipTier(str, enum.Enum):
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"

    @property
    def rank(self) -> int:
        """Informational ordering only: SILVER < GOLD < PLATINUM."""
        return _TIER_RANK[self]


_TIER_RANK = {
    MembershipTier.SILVER: 0,
    MembershipTier.GOLD: 1,
    MembershipTier.PLATINUM: 2,
}


class SpendRecord(Protocol):
    annual_spend: Decimal | None
    last_purchase_date: datetime | None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _purchased_within(last_purchase_date: datetime | None, now: datetime, months: int) -> bool:
    if last_purchase_date is None:
        return False
    return last_purchase_date >= now - relativedelta(months=months)


def calculate_tier(
    annual_spend: Decimal | None,
    last_purchase_date: datetime | None,
    now: datetime,
) -> MembershipTier:
    """Pure tier rule. Naive datetimes are read as UTC."""
    if annual_spend is None or annual_spend < GOLD_MIN_SPEND:
        return MembershipTier.SILVER

    now = _as_utc(now)
    if last_purchase_date is not None:
        last_purchase_date = _as_utc(last_purchase_date)

    if annual_spend >= PLATINUM_MIN_SPEND:
        if _purchased_within(last_purchase_date, now, PLATINUM_WINDOW_MONTHS):
            return MembershipTier.PLATINUM
        if _purchased_within(last_purchase_date, now, GOLD_WINDOW_MONTHS):
            return MembershipTier.GOLD
        return MembershipTier.SILVER

    if _purchased_within(last_purchase_date, now, GOLD_WINDOW_MONTHS):
        return MembershipTier.GOLD
    return MembershipTier.SILVER


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MembershipTierCalculator:
    """Applies :func:`calculate_tier` against an injectable clock."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def calculate(self, customer: SpendRecord, now: datetime | None = None) -> MembershipTier:
        return calculate_tier(
            customer.annual_spend,
            customer.last_purchase_date,
            now if now is not None else self.now(),
        )
