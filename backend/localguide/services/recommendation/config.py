"""Recommendation engine configuration — single source for all thresholds."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class InterestScoring:
    """Each interest token found in category or text counts once."""
    points_per_match: float = 1.0
    max_points: float = 3.0


@dataclass(frozen=True)
class BudgetScoring:
    """Listing price vs. the traveler's daily budget."""
    within_budget: float = 2.0
    stretch_ratio: float = 1.2       # up to 20% over budget
    within_stretch: float = 1.0
    over_budget: float = -1.5


@dataclass(frozen=True)
class PaceScoring:
    """Listing duration vs. the traveler's preferred pace."""
    fast_max_minutes: int = 120
    fast_match: float = 0.8
    fast_mismatch: float = -0.4
    relaxed_min_minutes: int = 180
    relaxed_match: float = 0.8
    relaxed_mismatch: float = 0.0


@dataclass(frozen=True)
class RatingScoring:
    """Small, stable boost from reviews. Count influence is capped."""
    avg_weight: float = 0.3
    count_weight: float = 0.01
    count_cap: int = 50
    max_points: float = 2.0


@dataclass(frozen=True)
class DistanceBands:
    """Great-circle distance bands (km) from the traveler's location."""
    earth_radius_km: float = 6371.0
    near_km: float = 5.0
    near: float = 1.2
    close_km: float = 15.0
    close: float = 0.6
    region_km: float = 50.0
    region: float = 0.1
    far: float = -0.4


@dataclass(frozen=True)
class AvailabilityBoosts:
    """Boost by number of open slots during the trip."""
    none: float = -0.8
    one: float = 0.6
    few_max: int = 3
    few: float = 1.2             # 2-3 open slots
    many: float = 1.6            # 4+


@dataclass(frozen=True)
class RecommendationLimits:
    shortlist_size: int = 20     # candidates enriched with availability
    max_results: int = 5         # ids returned per listing type


@dataclass(frozen=True)
class RecommendationConfig:
    """Top-level config aggregating all sub-configs."""
    interests: InterestScoring = field(default_factory=InterestScoring)
    budget: BudgetScoring = field(default_factory=BudgetScoring)
    pace: PaceScoring = field(default_factory=PaceScoring)
    rating: RatingScoring = field(default_factory=RatingScoring)
    distance: DistanceBands = field(default_factory=DistanceBands)
    availability: AvailabilityBoosts = field(default_factory=AvailabilityBoosts)
    limits: RecommendationLimits = field(default_factory=RecommendationLimits)


# Singleton — import this everywhere
recommendation_config = RecommendationConfig()
