"""Seed script for the LocalGuide development database."""

import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from localguide.database import Base, async_session_factory, engine
from localguide.models.availability import AvailabilitySlot, AvailabilityStatus
from localguide.models.listing import Experience, Tour

# ── Tours ──────────────────────────────────────────────────────────────────────

TOURS = [
    # (id, title, description, city, category, lat, lon, minutes, price, max_people, rating_avg, rating_count)
    ("tour-old-town", "Old Town Walking Tour", "History and architecture of the old town", "Bucharest", "history", 44.4306, 26.0997, 120, 35.0, 12, 4.8, 64),
    ("tour-food", "Street Food Crawl", "Markets, covrigi and local food stops", "Bucharest", "food", 44.4378, 26.0969, 180, 55.0, 8, 4.6, 31),
    ("tour-communist", "Communist Bucharest", "Palace of the Parliament and the civic centre", "Bucharest", "history", 44.4275, 26.0875, 150, 40.0, 15, 4.4, 18),
    ("tour-castle", "Peles Castle Day Trip", "A full day in the Carpathians with castle visit", "Bucharest", "nature", 45.3598, 25.5426, 600, 120.0, 6, 4.9, 52),
]

# ── Experiences ────────────────────────────────────────────────────────────────

EXPERIENCES = [
    ("exp-cooking", "Romanian Cooking Class", "Cook sarmale with a local host", "Bucharest", "food", 44.4420, 26.1010, 210, 70.0, 6, 4.9, 40),
    ("exp-wine", "Wine Tasting in Dealu Mare", "Tasting of five local wines", "Bucharest", "wine", 45.0200, 26.3000, 240, 90.0, 10, 4.7, 22),
    ("exp-pottery", "Pottery Workshop", "Hands-on ceramics in a small studio", "Bucharest", "art", 44.4500, 26.0800, 90, 45.0, 5, None, None),
]

WEEKEND_PROMO = {
    "weekday_discounts": {6: 10, 7: 10},
    "last_minute": {"hours_before_start": 24, "percent_off": 15},
    "group_tiers": [{"id": "group-6", "min_people": 6, "percent_off": 20}],
}


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as db:
        existing = await db.execute(select(func.count(Tour.id)))
        if existing.scalar_one() > 0:
            print("Listings already seeded, skipping.")
            return

        for (lid, title, desc, city, cat, lat, lon, minutes, price, max_people, avg, count) in TOURS:
            db.add(Tour(
                id=lid, guide_id="guide-demo", title=title, description=desc, city=city,
                country="Romania", category=cat, latitude=lat, longitude=lon,
                duration_minutes=minutes, price=price, max_people=max_people,
                rating_avg=avg, rating_count=count, smart_pricing=WEEKEND_PROMO, active=True,
            ))

        for (lid, title, desc, city, cat, lat, lon, minutes, price, max_people, avg, count) in EXPERIENCES:
            db.add(Experience(
                id=lid, host_id="host-demo", title=title, description=desc, city=city,
                country="Romania", category=cat, latitude=lat, longitude=lon,
                duration_minutes=minutes, price=price, max_people=max_people,
                rating_avg=avg, rating_count=count, active=True,
            ))

        # Two open morning slots per listing for the next week
        today = datetime.now(timezone.utc).replace(hour=10, minute=0, second=0, microsecond=0)
        for listing_type, rows, seller in (("tour", TOURS, "guide-demo"), ("experience", EXPERIENCES, "host-demo")):
            for row in rows:
                for day in (1, 4):
                    start = today + timedelta(days=day)
                    db.add(AvailabilitySlot(
                        seller_id=seller, listing_type=listing_type, listing_id=row[0],
                        start=start, end=start + timedelta(minutes=row[7]),
                        status=AvailabilityStatus.open.value, is_reserved=False,
                    ))

        await db.commit()
        print(f"Seeded {len(TOURS)} tours and {len(EXPERIENCES)} experiences.")


if __name__ == "__main__":
    asyncio.run(seed())
