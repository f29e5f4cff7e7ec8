"""Plain-dict views of ORM rows, shaped for the frontend (camelCase keys)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from models.mentor_session import MentorSession
from models.profile import Profile
from models.project import Project
from models.user import User


def iso(value: Optional[datetime]) -> Optional[str]:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def session_to_dict(s: MentorSession) -> Dict[str, Any]:
    return {
        "id": s.id,
        "mentorId": s.mentor_id,
        "studentId": s.student_id,
        "studentName": s.student_name,
        "studentEmail": s.student_email,
        "title": s.title,
        "description": s.description,
        "startTime": iso(s.start_time),
        "endTime": iso(s.end_time),
        "startedAt": iso(s.started_at),
        "endedAt": iso(s.ended_at),
        "durationMinutes": s.duration_minutes,
        "status": s.status,
        "paymentStatus": s.payment_status,
        "bookingType": s.booking_type,
        "meetingLink": s.meeting_link,
        "agoraChannel": s.agora_channel,
        "recordingUrl": s.recording_url,
        "notes": s.notes,
        "rescheduleCount": s.reschedule_count,
        "amount": s.amount,
        "currency": s.currency,
        "paymentId": s.payment_id,
        "createdAt": iso(s.created_at),
        "updatedAt": iso(s.updated_at),
    }


def user_summary(u: Optional[User]) -> Optional[Dict[str, Any]]:
    """Public fields only, like a populate('name avatar')."""
    if u is None:
        return None
    return {"id": u.id, "name": u.name, "avatar": u.avatar}


def user_to_dict(u: User) -> Dict[str, Any]:
    return {
        "id": u.id,
        "externalId": u.external_id,
        "email": u.email,
        "name": u.name,
        "avatar": u.avatar,
        "role": u.role,
        "createdAt": iso(u.created_at),
    }


def profile_to_dict(p: Profile, user: Optional[User]) -> Dict[str, Any]:
    return {
        "id": p.id,
        "user": {"id": user.id, "name": user.name, "email": user.email, "avatar": user.avatar}
        if user
        else None,
        "careerStage": p.career_stage,
        "longTermGoal": p.long_term_goal,
        "personalInfo": p.personal_info or {},
        "workHistory": p.work_history or [],
        "education": p.education or [],
        "projects": p.projects or [],
        "skills": p.skills or [],
        "preferences": p.preferences or {},
        "onboardingComplete": p.onboarding_complete,
        "createdAt": iso(p.created_at),
        "updatedAt": iso(p.updated_at),
    }


def project_to_dict(
    p: Project, mentor: Optional[User], participants: List[Optional[User]]
) -> Dict[str, Any]:
    return {
        "id": p.id,
        "title": p.title,
        "description": p.description,
        "mentor": user_summary(mentor),
        "difficulty": p.difficulty,
        "technologies": list(p.technologies or []),
        "status": p.status,
        "maxParticipants": p.max_participants,
        "participants": [user_summary(u) for u in participants if u is not None],
        "startDate": iso(p.start_date),
        "isActive": p.is_active,
    }
