"""Marketplace listings — tours (guides) and experiences (hosts)."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from localguide.database import Base

# JSONB on Postgres, plain JSON elsewhere
JSONVariant = JSON().with_variant(JSONB(), "postgresql")


class ListingMixin:
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    country: Mapped[str | None] = mapped_column(String(100))
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    max_people: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str | None] = mapped_column(String(50))
    # SmartPricing rule set, stored as written by the seller
    smart_pricing: Mapped[dict | None] = mapped_column(JSONVariant)
    rating_avg: Mapped[float | None] = mapped_column(Float)
    rating_count: Mapped[int | None] = mapped_column(Integer)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class Tour(ListingMixin, Base):
    __tablename__ = "tours"

    guide_id: Mapped[str] = mapped_column(String(64), nullable=False)


class Experience(ListingMixin, Base):
    __tablename__ = "experiences"

    host_id: Mapped[str] = mapped_column(String(64), nullable=False)
    instant_book: Mapped[bool | None] = mapped_column(Boolean)
