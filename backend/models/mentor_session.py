from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id, utc_now
from .types import UTCDateTime

SESSION_STATUSES = ("scheduled", "ongoing", "completed", "cancelled", "reschedule_requested")
PAYMENT_STATUSES = ("pending", "paid", "refunded")
BOOKING_TYPES = ("paid", "free")
# Roster id of a mentee booked by name only
MENTEE_ID_PREFIX = "mentee-"


class MentorSession(Base):
    """A scheduled meeting between a mentor and a student.

    mentor_id and student_id are identity-provider user ids, not FKs.
    """

    __tablename__ = "mentor_sessions"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    mentor_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    student_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True, index=True)
    student_name: Mapped[str] = mapped_column(String(200), nullable=False)
    student_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    start_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    end_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    started_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    ended_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[str] = mapped_column(String(32), nullable=False, default="scheduled", index=True)
    payment_status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending", index=True)
    booking_type: Mapped[str] = mapped_column(String(16), nullable=False, default="paid")

    meeting_link: Mapped[str] = mapped_column(String(1024), nullable=False)
    agora_channel: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, index=True)
    recording_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    reschedule_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    currency: Mapped[str] = mapped_column(String(8), nullable=False, default="INR")
    payment_id: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        Index("ix_mentor_session_mentor_start", "mentor_id", "start_time"),
    )
