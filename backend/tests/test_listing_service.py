from localguide.services.listing_service import listing_service, parse_smart_pricing
from localguide.services.pricing_engine import compute_total
from tests.factories import make_experience, make_tour, utc


async def test_candidates_are_active_listings_in_city(db):
    db.add_all([
        make_tour("t1", city="Bucharest", rating_avg=4.5, rating_count=12),
        make_tour("t2", city="bucharest"),
        make_tour("t3", city="Bucharest", active=False),
        make_tour("t4", city="Cluj"),
        make_experience("e1", city="Bucharest"),
    ])
    await db.commit()

    tours = await listing_service.get_candidates(db, "tour", " BUCHAREST ")
    assert sorted(t.id for t in tours) == ["t1", "t2"]
    assert all(t.listing_type == "tour" for t in tours)

    t1 = next(t for t in tours if t.id == "t1")
    assert (t1.rating_avg, t1.rating_count, t1.category) == (4.5, 12, "history")

    experiences = await listing_service.get_candidates(db, "experience", "Bucharest")
    assert [e.id for e in experiences] == ["e1"]


async def test_listing_pricing_parses_stored_rules(db):
    db.add(make_experience("e1", price=80.0, smart_pricing={
        "weekday_discounts": {"6": 10},
        "group_tiers": [{"id": "g1", "min_people": 4, "percent_off": 20}],
    }))
    await db.commit()

    price, rules = await listing_service.get_listing_pricing(db, "experience", "e1")
    assert price == 80.0
    assert rules.weekday_discounts == {6: 10}
    assert rules.group_tiers[0].min_people == 4


async def test_listing_pricing_for_unknown_listing(db):
    assert await listing_service.get_listing_pricing(db, "tour", "nope") is None


def test_invalid_stored_rules_are_ignored():
    assert parse_smart_pricing("twenty percent", "t1") is None
    assert parse_smart_pricing({"group_tiers": "twenty percent"}, "t1").group_tiers is None
    assert parse_smart_pricing(None) is None
    assert parse_smart_pricing({}) is None


async def test_one_bad_rule_does_not_drop_the_others(db):
    db.add(make_tour("t1", price=100.0, smart_pricing={
        "group_tiers": [
            {"id": "g1", "min_people": 4, "percent_off": 20},
            {"id": "g2", "min_people": "many", "percent_off": 90},
        ],
        "seasonal": [{"id": "s1", "name": "Winter", "start_iso": None, "end_iso": "2026-12-31T00:00:00Z", "percent_off": 50}],
        "weekday_discounts": {"1": 10, "funday": 30},
        "last_minute": {"hours_before_start": "soon", "percent_off": 40},
    }))
    await db.commit()

    price, rules = await listing_service.get_listing_pricing(db, "tour", "t1")
    assert [t.id for t in rules.group_tiers] == ["g1"]
    assert rules.seasonal[0].start_iso is None
    assert rules.weekday_discounts == {1: 10}
    assert rules.last_minute is None

    result = compute_total(price, utc(2026, 10, 19, 10, 0), 5, rules, now=utc(2026, 10, 1))
    assert result.applied_percent_off == 20
    assert result.applied_label == "Group"
    assert result.total == 400.0
