"""Pricing engine — applies the single best smart-pricing discount to a booking."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone

from localguide.schemas.pricing import SmartPricing

logger = logging.getLogger(__name__)

LABEL_PROMO = "Promo"
LABEL_WEEKDAY = "Weekday"
LABEL_LAST_MINUTE = "Last minute"
LABEL_SEASONAL = "Seasonal"
LABEL_GROUP = "Group"


@dataclass(frozen=True)
class PricingBreakdown:
    base_per_person: float
    people_count: int
    applied_percent_off: int
    applied_label: str | None
    total: float


def compute_total(
    base_per_person: float,
    start: datetime,
    people_count: int,
    smart_pricing: SmartPricing | None,
    now: datetime | None = None,
) -> PricingBreakdown:
    """
    Compute the total price of a booking with optional smart pricing.

    Every rule family (promo, weekday, last-minute, seasonal, group) is
    evaluated on its own and the single highest percent wins. On equal
    percents the first candidate in that order is kept.

    Promo campaigns are active relative to `now`; seasonal discounts relative
    to the booking `start`. Naive datetimes are read as UTC.
    """
    base_per_person = max(0.0, float(base_per_person))
    people_count = max(1, int(people_count))
    base_total = base_per_person * people_count

    if smart_pricing is None:
        return PricingBreakdown(base_per_person, people_count, 0, None, base_total)

    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    start = _as_utc(start)

    candidates: list[tuple[int, str]] = []

    # Promo campaigns
    for promo in smart_pricing.promo_campaigns or []:
        if _is_active(promo.start_iso, promo.end_iso, now):
            candidates.append((_clamp_percent(promo.percent_off), promo.name or LABEL_PROMO))

    # Weekday discounts
    if smart_pricing.weekday_discounts:
        pct = smart_pricing.weekday_discounts.get(start.isoweekday())
        if pct is not None and pct > 0:
            candidates.append((_clamp_percent(pct), LABEL_WEEKDAY))

    # Last-minute
    last_minute = smart_pricing.last_minute
    if last_minute is not None:
        hours = _hours_between(now, start)
        if 0 <= hours <= last_minute.hours_before_start:
            candidates.append((_clamp_percent(last_minute.percent_off), LABEL_LAST_MINUTE))

    # Seasonal
    for season in smart_pricing.seasonal or []:
        if _is_active(season.start_iso, season.end_iso, start):
            candidates.append((_clamp_percent(season.percent_off), season.name or LABEL_SEASONAL))

    # Group tiers: best applicable tier only
    applicable = [
        _clamp_percent(tier.percent_off)
        for tier in smart_pricing.group_tiers or []
        if people_count >= tier.min_people
    ]
    if applicable:
        candidates.append((max(applicable), LABEL_GROUP))

    if not candidates:
        return PricingBreakdown(base_per_person, people_count, 0, None, base_total)

    pct, label = max(candidates, key=lambda c: c[0])
    total = base_total * (1.0 - pct / 100.0)
    return PricingBreakdown(base_per_person, people_count, pct, label, total)


def _clamp_percent(value: int) -> int:
    return max(0, min(100, int(value)))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _hours_between(a: datetime, b: datetime) -> int:
    """Whole hours from a to b, rounded toward negative infinity."""
    return math.floor((b - a).total_seconds() / 3600.0)


def _parse_iso(value: str | None) -> datetime | None:
    """Full ISO-8601 date-time only; date-only bounds are rejected."""
    if not isinstance(value, str) or "T" not in value:
        return None
    try:
        return _as_utc(datetime.fromisoformat(value))
    except (TypeError, ValueError):
        return None


def _is_active(start_iso: str | None, end_iso: str | None, at: datetime) -> bool:
    """True if `at` falls inside the inclusive range; unparseable bounds are inactive."""
    range_start = _parse_iso(start_iso)
    range_end = _parse_iso(end_iso)
    if range_start is None or range_end is None:
        logger.debug(f"Ignoring pricing rule with unparseable range {start_iso!r}..{end_iso!r}")
        return False
    return range_start <= at <= range_end
