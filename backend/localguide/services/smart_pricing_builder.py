"""Builds a SmartPricing rule set from the seller's create-listing form."""

import uuid
from datetime import datetime, timezone

from localguide.schemas.pricing import GroupTier, LastMinuteDiscount, PromoCampaign, SmartPricing


def build_smart_pricing(
    promo_percent: int,
    promo_start: datetime,
    promo_end: datetime,
    last_minute_hours: int,
    last_minute_percent: int,
    group_min_people: int,
    group_percent: int,
) -> SmartPricing | None:
    """
    Turn the form's flat fields into a rule set.

    A family is only included when its percent is positive. Returns None if
    the seller configured nothing.
    """
    smart_pricing = SmartPricing()

    if promo_percent > 0:
        smart_pricing.promo_campaigns = [
            PromoCampaign(
                id=str(uuid.uuid4()),
                name="Promo",
                start_iso=_to_iso(promo_start),
                end_iso=_to_iso(promo_end),
                percent_off=promo_percent,
            )
        ]

    if last_minute_percent > 0:
        smart_pricing.last_minute = LastMinuteDiscount(
            hours_before_start=last_minute_hours,
            percent_off=last_minute_percent,
        )

    if group_percent > 0:
        smart_pricing.group_tiers = [
            GroupTier(id=str(uuid.uuid4()), min_people=group_min_people, percent_off=group_percent)
        ]

    has_any = bool(smart_pricing.promo_campaigns) or smart_pricing.last_minute is not None or bool(smart_pricing.group_tiers)
    return smart_pricing if has_any else None


def _to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
