"""Trip recommendation engine — heuristic matcher between a trip and marketplace listings.

Pipeline (tours and experiences independently):
    1. Filter       active, same city, fits the group
    2. Base score   interests + budget + pace + distance + rating
    3. Shortlist    top N by base score (bounds the lookups in step 4)
    4. Enrich       concurrent open-slot lookups, boost by availability
    5. Rank         boosted score, ties by rating; top K ids

A failing availability lookup only costs that listing its boost; it never
fails the recommendation.
"""

import asyncio
import logging

from localguide.services.recommendation.availability import AvailabilityLookup
from localguide.services.recommendation.candidates import (
    CandidateListing,
    RecommendationResult,
    ScoredCandidate,
    TripIntent,
)
from localguide.services.recommendation.config import recommendation_config
from localguide.services.recommendation.scoring import availability_boost, base_score, normalize

logger = logging.getLogger(__name__)

limits = recommendation_config.limits


class TripRecommendationEngine:
    """Stateless apart from the injected availability lookup."""

    def __init__(self, availability: AvailabilityLookup | None):
        self.availability = availability

    async def recommend(
        self,
        intent: TripIntent,
        tours: list[CandidateListing],
        experiences: list[CandidateListing],
    ) -> RecommendationResult:
        tour_ids, experience_ids = await asyncio.gather(
            self._rank("tour", intent, tours),
            self._rank("experience", intent, experiences),
        )
        logger.info(
            f"Recommendations for {intent.destination_city}: "
            f"{len(tour_ids)}/{len(tours)} tours, {len(experience_ids)}/{len(experiences)} experiences"
        )
        return RecommendationResult(tour_ids=tour_ids, experience_ids=experience_ids)

    async def _rank(
        self, listing_type: str, intent: TripIntent, candidates: list[CandidateListing]
    ) -> list[str]:
        # 1) Basic filtering
        eligible = [c for c in candidates if self._is_eligible(c, intent)]
        if not eligible:
            return []

        # 2) Score without availability first to shortlist
        prelim = [ScoredCandidate(listing=c, score=base_score(c, intent)) for c in eligible]
        prelim.sort(key=lambda s: s.score, reverse=True)

        # 3) Only the shortlist gets availability lookups
        shortlist = prelim[: limits.shortlist_size]

        # 4) Availability enrichment
        enriched = await self._enrich_with_availability(listing_type, shortlist, intent)

        # 5) Final sort with availability boost + rating tie-break
        enriched.sort(
            key=lambda s: (s.score, s.listing.rating_avg or 0.0, s.listing.rating_count or 0),
            reverse=True,
        )
        return [s.listing.id for s in enriched[: limits.max_results]]

    @staticmethod
    def _is_eligible(listing: CandidateListing, intent: TripIntent) -> bool:
        if not listing.active:
            return False
        if normalize(listing.city) != normalize(intent.destination_city):
            return False
        if intent.group_size is not None and intent.group_size > listing.max_people:
            return False
        return True

    async def _enrich_with_availability(
        self, listing_type: str, shortlist: list[ScoredCandidate], intent: TripIntent
    ) -> list[ScoredCandidate]:
        counts = await asyncio.gather(
            *(self._availability_count(listing_type, s.listing.id, intent) for s in shortlist)
        )
        return [
            ScoredCandidate(
                listing=s.listing,
                score=s.score + availability_boost(count),
                availability_count=count,
            )
            for s, count in zip(shortlist, counts)
        ]

    async def _availability_count(self, listing_type: str, listing_id: str, intent: TripIntent) -> int:
        if self.availability is None:
            return 0
        try:
            return await self.availability.count_open(
                listing_type, listing_id, intent.start_date, intent.end_date
            )
        except Exception as e:
            # Missing or broken availability must not fail recommendations
            logger.warning(f"Availability lookup failed for {listing_type} {listing_id}: {e!r}")
            return 0
