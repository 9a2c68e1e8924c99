"""Base scoring — how well a listing fits the trip before availability is known."""

from math import asin, cos, radians, sin, sqrt

from localguide.services.recommendation.candidates import CandidateListing, GeoPoint, TripIntent
from localguide.services.recommendation.config import recommendation_config

cfg = recommendation_config


def base_score(listing: CandidateListing, intent: TripIntent) -> float:
    """Sum of the independent sub-scores for one listing."""
    score = 0.0
    score += interest_score(listing.category, listing.title, listing.description, intent.interests)
    score += budget_score(listing.price, intent.budget_per_day)
    score += pace_score(listing.duration_minutes, intent.pace)
    score += distance_score(listing.latitude, listing.longitude, intent.traveler_location)
    score += rating_score(listing.rating_avg, listing.rating_count)
    return score


def normalize(text: str | None) -> str:
    return (text or "").strip().lower()


def interest_score(
    category: str | None, title: str, description: str, interests: list[str]
) -> float:
    """One point per interest token found in the category or title/description, capped."""
    tokens = [t for t in dict.fromkeys(normalize(i) for i in interests) if t]
    if not tokens:
        return 0.0

    cat = normalize(category)
    text = normalize(f"{title} {description}")

    matches = sum(1 for t in tokens if t in cat or t in text)
    return min(cfg.interests.max_points, matches * cfg.interests.points_per_match)


def budget_score(price: float, budget_per_day: float | None) -> float:
    if budget_per_day is None or budget_per_day <= 0:
        return 0.0
    if price <= budget_per_day:
        return cfg.budget.within_budget
    if price <= budget_per_day * cfg.budget.stretch_ratio:
        return cfg.budget.within_stretch
    return cfg.budget.over_budget


def pace_score(duration_minutes: int, pace: str | None) -> float:
    p = normalize(pace)
    if p == "fast":
        return cfg.pace.fast_match if duration_minutes <= cfg.pace.fast_max_minutes else cfg.pace.fast_mismatch
    if p == "relaxed":
        return cfg.pace.relaxed_match if duration_minutes >= cfg.pace.relaxed_min_minutes else cfg.pace.relaxed_mismatch
    return 0.0


def rating_score(avg: float | None, count: int | None) -> float:
    a = avg or 0.0
    c = min(cfg.rating.count_cap, count or 0)
    return min(cfg.rating.max_points, a * cfg.rating.avg_weight + c * cfg.rating.count_weight)


def distance_score(lat: float | None, lon: float | None, traveler: GeoPoint | None) -> float:
    if traveler is None or lat is None or lon is None:
        return 0.0

    km = haversine_km(traveler.latitude, traveler.longitude, lat, lon)
    bands = cfg.distance
    if km <= bands.near_km:
        return bands.near
    if km <= bands.close_km:
        return bands.close
    if km <= bands.region_km:
        return bands.region
    return bands.far


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    dlat, dlon = radians(lat2 - lat1), radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    return 2 * cfg.distance.earth_radius_km * asin(sqrt(min(1.0, a)))


def availability_boost(open_count: int) -> float:
    boosts = cfg.availability
    if open_count <= 0:
        return boosts.none
    if open_count == 1:
        return boosts.one
    if open_count <= boosts.few_max:
        return boosts.few
    return boosts.many
