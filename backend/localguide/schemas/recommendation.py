from datetime import date

from pydantic import BaseModel, model_validator


class TripIntentRequest(BaseModel):
    city: str
    country: str | None = None
    start_date: date
    end_date: date
    interests: list[str] = []
    budget_per_day: float | None = None
    pace: str | None = None
    group_size: int | None = None
    latitude: float | None = None
    longitude: float | None = None

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class RecommendationResponse(BaseModel):
    tour_ids: list[str]
    experience_ids: list[str]
