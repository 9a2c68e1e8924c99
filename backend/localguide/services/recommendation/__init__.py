"""Trip recommendation engine — links marketplace listings to a traveler's trip.

Modules:
    config        Centralized scoring thresholds and limits
    scoring       Base sub-scores (interests, budget, pace, rating, distance)
    availability  Open-slot lookups used to enrich the shortlist
    engine        Filter → score → shortlist → enrich → rank pipeline
"""
