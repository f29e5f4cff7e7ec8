"""Request bodies shared by the API routers. JSON uses camelCase keys."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SessionCreateBody(CamelModel):
    """Required fields are checked by the service so the error names all of them."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "mentorId": "user_mentor_1",
                "studentName": "Aditi Rao",
                "title": "System Design Mock Interview",
                "startTime": "2025-01-06T10:00:00Z",
                "endTime": "2025-01-06T10:45:00Z",
            }
        },
    )

    mentor_id: Optional[str] = None
    student_id: Optional[str] = None
    student_name: Optional[str] = None
    student_email: Optional[EmailStr] = None
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    meeting_link: Optional[str] = None


class SessionUpdateBody(CamelModel):
    status: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    notes: Optional[str] = None
    meeting_link: Optional[str] = None
    recording_url: Optional[str] = None


class ConfirmPaymentBody(SessionCreateBody):
    amount: Optional[float] = Field(default=None, ge=0)
    payment_id: Optional[str] = None
    mentor_email: Optional[EmailStr] = None
    mentor_name: Optional[str] = None


class SessionJoinBody(CamelModel):
    session_id: Optional[str] = None
    user_id: Optional[str] = None


class WeeklySlotBody(CamelModel):
    day: str
    start_time: str
    end_time: str
    is_active: bool = True


class OverrideSlotBody(CamelModel):
    on_date: date = Field(..., alias="date")
    is_blocked: bool = True
    reason: Optional[str] = None


class AvailabilityBody(CamelModel):
    timezone: str = "UTC"
    weekly_slots: List[WeeklySlotBody] = Field(default_factory=list)
    override_slots: List[OverrideSlotBody] = Field(default_factory=list)


class MenteeMessageBody(CamelModel):
    mentor_id: Optional[str] = None
    message: Optional[str] = None


class ProfileBody(CamelModel):
    career_stage: Optional[str] = None
    long_term_goal: Optional[str] = None
    personal_info: Optional[Dict[str, Any]] = None
    work_history: Optional[List[Dict[str, Any]]] = None
    education: Optional[List[Dict[str, Any]]] = None
    projects: Optional[List[Dict[str, Any]]] = None
    skills: Optional[List[str]] = None
    preferences: Optional[Dict[str, Any]] = None
    onboarding_complete: Optional[bool] = None


class TokenBody(BaseModel):
    token: str = Field(..., min_length=1)


class LeadBody(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    mobile: str = Field(..., min_length=1)
    utm: Optional[Dict[str, Any]] = None
    page: Optional[str] = None


class EnterpriseDemoBody(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    company: str = Field(..., min_length=1)
    page: Optional[str] = None


class ContactBody(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
