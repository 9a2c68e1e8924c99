"""Data structures shared by the recommendation pipeline."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

ListingType = Literal["tour", "experience"]


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class TripIntent:
    """What the traveler asked the trip planner for."""

    destination_city: str
    start_date: date
    end_date: date
    destination_country: str | None = None
    interests: list[str] = field(default_factory=list)
    budget_per_day: float | None = None
    pace: str | None = None              # "fast" | "relaxed" | anything else
    group_size: int | None = None
    traveler_location: GeoPoint | None = None


@dataclass(frozen=True)
class CandidateListing:
    """Read-only snapshot of a tour or experience."""

    id: str
    listing_type: ListingType
    active: bool
    city: str
    max_people: int
    title: str
    description: str
    price: float
    duration_minutes: int
    category: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    rating_avg: float | None = None
    rating_count: int | None = None


@dataclass
class ScoredCandidate:
    listing: CandidateListing
    score: float
    availability_count: int = 0


@dataclass
class RecommendationResult:
    tour_ids: list[str] = field(default_factory=list)
    experience_ids: list[str] = field(default_factory=list)
