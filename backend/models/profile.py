from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, new_id, utc_now
from .types import UTCDateTime


class Profile(Base):
    """Career profile, one per user. Nested sections are stored as JSON."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    career_stage: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    long_term_goal: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    personal_info: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    work_history: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    education: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    projects: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    skills: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    preferences: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    onboarding_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now, onupdate=utc_now
    )
