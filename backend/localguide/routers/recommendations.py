"""Recommendations router — links in-app tours and experiences to a trip."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from localguide.database import async_session_factory, get_db
from localguide.schemas.recommendation import RecommendationResponse, TripIntentRequest
from localguide.services.listing_service import listing_service
from localguide.services.recommendation.availability import SqlAvailabilityLookup
from localguide.services.recommendation.candidates import GeoPoint, TripIntent
from localguide.services.recommendation.engine import TripRecommendationEngine

logger = logging.getLogger(__name__)

router = APIRouter()


def get_recommendation_engine() -> TripRecommendationEngine:
    return TripRecommendationEngine(SqlAvailabilityLookup(async_session_factory))


def _to_intent(req: TripIntentRequest) -> TripIntent:
    location = None
    if req.latitude is not None and req.longitude is not None:
        location = GeoPoint(latitude=req.latitude, longitude=req.longitude)
    return TripIntent(
        destination_city=req.city,
        destination_country=req.country,
        start_date=req.start_date,
        end_date=req.end_date,
        interests=list(req.interests),
        budget_per_day=req.budget_per_day,
        pace=req.pace,
        group_size=req.group_size,
        traveler_location=location,
    )


@router.post("", response_model=RecommendationResponse)
async def recommend(
    req: TripIntentRequest,
    db: AsyncSession = Depends(get_db),
    engine: TripRecommendationEngine = Depends(get_recommendation_engine),
):
    """Rank active listings in the destination city for the requested trip."""
    tours = await listing_service.get_candidates(db, "tour", req.city)
    experiences = await listing_service.get_candidates(db, "experience", req.city)

    result = await engine.recommend(_to_intent(req), tours, experiences)
    return RecommendationResponse(tour_ids=result.tour_ids, experience_ids=result.experience_ids)
