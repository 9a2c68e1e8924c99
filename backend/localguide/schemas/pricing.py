"""Smart pricing rule set and quote request/response schemas.

Percent values are expected in 0..100 but are not validated here; the pricing
engine clamps them. Date ranges stay as the ISO-8601 strings the seller saved
so that a malformed or missing bound only disables its own rule. A stored
rule that fails validation is dropped on its own; the rest of the rule set
still applies.
"""

import logging
from datetime import datetime

from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

logger = logging.getLogger(__name__)

_percent = TypeAdapter(int)


class PromoCampaign(BaseModel):
    id: str = ""
    name: str | None = ""
    start_iso: str | None = None
    end_iso: str | None = None
    percent_off: int
    code: str | None = None


class LastMinuteDiscount(BaseModel):
    hours_before_start: int
    percent_off: int


class SeasonalDiscount(BaseModel):
    id: str = ""
    name: str | None = ""
    start_iso: str | None = None
    end_iso: str | None = None
    percent_off: int


class GroupTier(BaseModel):
    id: str = ""
    min_people: int
    percent_off: int


def _keep_valid(model: type[BaseModel], items, family: str) -> list | None:
    if items is None:
        return None
    if not isinstance(items, list):
        logger.warning(f"Ignoring {family} rules: expected a list, got {type(items).__name__}")
        return None
    kept = []
    for item in items:
        try:
            kept.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Ignoring invalid {family} rule: {e.error_count()} errors")
    return kept


class SmartPricing(BaseModel):
    # ISO weekday (1=Mon ... 7=Sun) -> percent off
    weekday_discounts: dict[int, int] | None = None
    last_minute: LastMinuteDiscount | None = None
    seasonal: list[SeasonalDiscount] | None = None
    group_tiers: list[GroupTier] | None = None
    promo_campaigns: list[PromoCampaign] | None = None

    @field_validator("weekday_discounts", mode="before")
    @classmethod
    def _valid_weekdays(cls, value):
        if value is None:
            return None
        if not isinstance(value, dict):
            logger.warning("Ignoring weekday rules: expected a mapping")
            return None
        kept = {}
        for day, pct in value.items():
            try:
                kept[_percent.validate_python(day)] = _percent.validate_python(pct)
            except ValidationError:
                logger.warning(f"Ignoring invalid weekday rule {day!r}: {pct!r}")
        return kept

    @field_validator("last_minute", mode="before")
    @classmethod
    def _valid_last_minute(cls, value):
        if value is None:
            return None
        try:
            return LastMinuteDiscount.model_validate(value)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid last-minute rule: {e.error_count()} errors")
            return None

    @field_validator("seasonal", mode="before")
    @classmethod
    def _valid_seasonal(cls, value):
        return _keep_valid(SeasonalDiscount, value, "seasonal")

    @field_validator("group_tiers", mode="before")
    @classmethod
    def _valid_group_tiers(cls, value):
        return _keep_valid(GroupTier, value, "group")

    @field_validator("promo_campaigns", mode="before")
    @classmethod
    def _valid_promos(cls, value):
        return _keep_valid(PromoCampaign, value, "promo")


class PriceQuoteRequest(BaseModel):
    base_per_person: float
    start: datetime
    people_count: int = 1
    smart_pricing: SmartPricing | None = None


class ListingQuoteRequest(BaseModel):
    start: datetime
    people_count: int = 1


class PricingBreakdownResponse(BaseModel):
    base_per_person: float
    people_count: int
    applied_percent_off: int
    applied_label: str | None
    total: float

    model_config = {"from_attributes": True}


class SmartPricingForm(BaseModel):
    """Flat fields from the seller's create-listing form."""
    promo_percent: int = 0
    promo_start: datetime | None = None
    promo_end: datetime | None = None
    last_minute_hours: int = 0
    last_minute_percent: int = 0
    group_min_people: int = 1
    group_percent: int = 0
