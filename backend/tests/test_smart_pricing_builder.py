from datetime import timedelta

from localguide.services.pricing_engine import compute_total
from localguide.services.smart_pricing_builder import build_smart_pricing
from tests.factories import utc

PROMO_START = utc(2026, 11, 1)
PROMO_END = utc(2026, 11, 30, 23, 59)


def build(**overrides):
    fields = dict(
        promo_percent=0,
        promo_start=PROMO_START,
        promo_end=PROMO_END,
        last_minute_hours=24,
        last_minute_percent=0,
        group_min_people=4,
        group_percent=0,
    )
    fields.update(overrides)
    return build_smart_pricing(**fields)


def test_nothing_configured_returns_none():
    assert build() is None


def test_promo_campaign_uses_iso_bounds():
    rules = build(promo_percent=15)
    [campaign] = rules.promo_campaigns
    assert campaign.name == "Promo"
    assert campaign.percent_off == 15
    assert campaign.start_iso == "2026-11-01T00:00:00Z"
    assert campaign.end_iso == "2026-11-30T23:59:00Z"
    assert campaign.id
    assert rules.last_minute is None
    assert rules.group_tiers is None


def test_last_minute_and_group():
    rules = build(last_minute_hours=12, last_minute_percent=10, group_min_people=6, group_percent=20)
    assert rules.promo_campaigns is None
    assert rules.last_minute.hours_before_start == 12
    assert rules.last_minute.percent_off == 10
    [tier] = rules.group_tiers
    assert (tier.min_people, tier.percent_off) == (6, 20)


def test_generated_ids_are_unique():
    first = build(promo_percent=5, group_percent=5)
    second = build(promo_percent=5, group_percent=5)
    assert first.promo_campaigns[0].id != second.promo_campaigns[0].id
    assert first.group_tiers[0].id != second.group_tiers[0].id


def test_built_promo_is_honoured_by_pricing():
    rules = build(promo_percent=15)
    inside = compute_total(100.0, utc(2026, 12, 24), 1, rules, now=PROMO_START + timedelta(days=3))
    outside = compute_total(100.0, utc(2026, 12, 24), 1, rules, now=PROMO_END + timedelta(days=1))
    assert inside.total == 85.0
    assert outside.total == 100.0
