from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Boolean, Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class MentorAvailability(Base):
    """Availability root for one mentor; weekly template and overrides hang off it."""

    __tablename__ = "mentor_availability"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    mentor_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")


class WeeklySlot(Base):
    """Recurring weekly window, e.g. Monday 18:00-19:00."""

    __tablename__ = "availability_weekly_slots"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    availability_id: Mapped[str] = mapped_column(
        ForeignKey("mentor_availability.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day: Mapped[str] = mapped_column(String(16), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class AvailabilityOverride(Base):
    """Date-specific override of the weekly template."""

    __tablename__ = "availability_overrides"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    availability_id: Mapped[str] = mapped_column(
        ForeignKey("mentor_availability.id", ondelete="CASCADE"), nullable=False, index=True
    )
    on_date: Mapped[date] = mapped_column("date", Date, nullable=False)
    is_blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    reason: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)

    __table_args__ = (
        UniqueConstraint("availability_id", "date", name="uq_availability_override_date"),
    )
