"""Listing service — reads tours and experiences from the listing store."""

import logging

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from localguide.models.listing import Experience, Tour
from localguide.schemas.pricing import SmartPricing
from localguide.services.recommendation.candidates import CandidateListing

logger = logging.getLogger(__name__)

LISTING_MODELS = {
    "tour": Tour,
    "experience": Experience,
}


def parse_smart_pricing(raw: dict | None, listing_id: str = "") -> SmartPricing | None:
    """Validate a stored rule set. An invalid one is treated as absent."""
    if not raw:
        return None
    try:
        return SmartPricing.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid smart pricing on listing {listing_id}: {e.error_count()} errors")
        return None


def to_candidate(listing: Tour | Experience, listing_type: str) -> CandidateListing:
    return CandidateListing(
        id=listing.id,
        listing_type=listing_type,
        active=bool(listing.active),
        city=listing.city,
        max_people=listing.max_people,
        title=listing.title,
        description=listing.description or "",
        price=float(listing.price),
        duration_minutes=listing.duration_minutes,
        category=listing.category,
        latitude=listing.latitude,
        longitude=listing.longitude,
        rating_avg=listing.rating_avg,
        rating_count=listing.rating_count,
    )


class ListingService:
    """Read-only access to marketplace listings."""

    async def get_candidates(
        self, db: AsyncSession, listing_type: str, city: str
    ) -> list[CandidateListing]:
        """Active listings in a city (case-insensitive), as recommendation snapshots."""
        model = LISTING_MODELS[listing_type]
        result = await db.execute(
            select(model).where(
                model.active == True,  # noqa: E712
                func.lower(model.city) == city.strip().lower(),
            )
        )
        return [to_candidate(row, listing_type) for row in result.scalars().all()]

    async def get_listing_pricing(
        self, db: AsyncSession, listing_type: str, listing_id: str
    ) -> tuple[float, SmartPricing | None] | None:
        """Price per person and rule set for a listing, or None if it does not exist."""
        model = LISTING_MODELS[listing_type]
        listing = await db.get(model, listing_id)
        if listing is None:
            return None
        return float(listing.price), parse_smart_pricing(listing.smart_pricing, listing_id)


listing_service = ListingService()
