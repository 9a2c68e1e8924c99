"""Availability slots published by guides and hosts per listing."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from localguide.database import Base


class AvailabilityStatus(str, enum.Enum):
    open = "open"
    reserved = "reserved"
    closed = "closed"


class AvailabilitySlot(Base):
    __tablename__ = "availability_slots"
    __table_args__ = (
        Index("idx_availability_listing_start", "listing_type", "listing_id", "start"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    seller_id: Mapped[str] = mapped_column(String(64), nullable=False)
    listing_type: Mapped[str] = mapped_column(String(20), nullable=False)  # tour | experience
    listing_id: Mapped[str] = mapped_column(String(64), nullable=False)
    capacity: Mapped[int | None] = mapped_column(Integer)
    is_reserved: Mapped[bool | None] = mapped_column(Boolean)
    reserved_count: Mapped[int | None] = mapped_column(Integer)
    start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=AvailabilityStatus.open.value)
    booking_id: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
