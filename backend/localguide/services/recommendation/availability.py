"""Availability lookups — counts open, unreserved slots for a listing in a date range."""

import asyncio
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Protocol

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from localguide.config import settings
from localguide.models.availability import AvailabilitySlot, AvailabilityStatus
from localguide.services.cache_service import CacheService, cache_service

logger = logging.getLogger(__name__)


class AvailabilityLookup(Protocol):
    async def count_open(self, listing_type: str, listing_id: str, start: date, end: date) -> int:
        ...


def day_range_utc(start: date, end: date) -> tuple[datetime, datetime]:
    """[start 00:00 UTC, day after end 00:00 UTC) so the whole last day is included."""
    range_start = datetime.combine(start, time.min, tzinfo=timezone.utc)
    range_end = datetime.combine(end + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return range_start, range_end


class SqlAvailabilityLookup:
    """Counts slots in the listing store.

    One session per call, so lookups for a whole shortlist can run
    concurrently. Each call is bounded by its own timeout.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: CacheService | None = cache_service,
        timeout_seconds: float | None = None,
    ):
        self._session_factory = session_factory
        self._cache = cache
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.availability_lookup_timeout_seconds

    async def count_open(self, listing_type: str, listing_id: str, start: date, end: date) -> int:
        """Open-slot count; the cache round trips and the query share one timeout."""
        return await asyncio.wait_for(
            self._count_open(listing_type, listing_id, start, end),
            timeout=self._timeout,
        )

    async def _count_open(self, listing_type: str, listing_id: str, start: date, end: date) -> int:
        start_key, end_key = start.isoformat(), end.isoformat()
        if self._cache is not None:
            cached = await self._cache.get_open_count(listing_type, listing_id, start_key, end_key)
            if cached is not None:
                return cached

        count = await self._query_count(listing_type, listing_id, start, end)

        if self._cache is not None:
            await self._cache.set_open_count(listing_type, listing_id, start_key, end_key, count)
        return count

    async def _query_count(self, listing_type: str, listing_id: str, start: date, end: date) -> int:
        range_start, range_end = day_range_utc(start, end)
        async with self._session_factory() as db:
            result = await db.execute(
                select(func.count(AvailabilitySlot.id)).where(
                    AvailabilitySlot.listing_type == listing_type,
                    AvailabilitySlot.listing_id == listing_id,
                    AvailabilitySlot.status == AvailabilityStatus.open.value,
                    or_(AvailabilitySlot.is_reserved.is_(None), AvailabilitySlot.is_reserved.is_(False)),
                    AvailabilitySlot.start >= range_start,
                    AvailabilitySlot.start < range_end,
                )
            )
            return int(result.scalar_one())
