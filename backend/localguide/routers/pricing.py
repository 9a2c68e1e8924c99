"""Pricing router — price quotes and smart pricing rule building."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from localguide.database import get_db
from localguide.schemas.pricing import (
    ListingQuoteRequest,
    PriceQuoteRequest,
    PricingBreakdownResponse,
    SmartPricing,
    SmartPricingForm,
)
from localguide.services.listing_service import LISTING_MODELS, listing_service
from localguide.services.pricing_engine import PricingBreakdown, compute_total
from localguide.services.smart_pricing_builder import build_smart_pricing

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(breakdown: PricingBreakdown) -> PricingBreakdownResponse:
    return PricingBreakdownResponse(
        base_per_person=breakdown.base_per_person,
        people_count=breakdown.people_count,
        applied_percent_off=breakdown.applied_percent_off,
        applied_label=breakdown.applied_label,
        total=round(breakdown.total, 2),
    )


@router.post("/quote", response_model=PricingBreakdownResponse)
async def quote(req: PriceQuoteRequest):
    """Price a booking from an inline price and optional rule set."""
    breakdown = compute_total(
        base_per_person=req.base_per_person,
        start=req.start,
        people_count=req.people_count,
        smart_pricing=req.smart_pricing,
    )
    return _to_response(breakdown)


@router.post("/{listing_type}/{listing_id}/quote", response_model=PricingBreakdownResponse)
async def quote_listing(
    listing_type: str,
    listing_id: str,
    req: ListingQuoteRequest,
    db: AsyncSession = Depends(get_db),
):
    """Price a booking for a stored tour or experience."""
    listing_type = listing_type.lower()
    if listing_type not in LISTING_MODELS:
        raise HTTPException(status_code=400, detail=f"Unknown listing type: {listing_type}")

    pricing = await listing_service.get_listing_pricing(db, listing_type, listing_id)
    if pricing is None:
        raise HTTPException(status_code=404, detail="Listing not found")

    price, smart_pricing = pricing
    breakdown = compute_total(
        base_per_person=price,
        start=req.start,
        people_count=req.people_count,
        smart_pricing=smart_pricing,
    )
    logger.debug(
        f"Quote {listing_type} {listing_id}: {breakdown.applied_percent_off}% "
        f"({breakdown.applied_label}) -> {breakdown.total:.2f}"
    )
    return _to_response(breakdown)


@router.post("/rules", response_model=SmartPricing | None)
async def build_rules(form: SmartPricingForm):
    """Build a rule set from the create-listing form. Returns null if nothing is configured."""
    now = datetime.now(timezone.utc)
    promo_start = form.promo_start or now
    promo_end = form.promo_end or promo_start
    if form.promo_percent > 0 and promo_end < promo_start:
        raise HTTPException(status_code=400, detail="promo_end must not be before promo_start")

    return build_smart_pricing(
        promo_percent=form.promo_percent,
        promo_start=promo_start,
        promo_end=promo_end,
        last_minute_hours=form.last_minute_hours,
        last_minute_percent=form.last_minute_percent,
        group_min_people=form.group_min_people,
        group_percent=form.group_percent,
    )
