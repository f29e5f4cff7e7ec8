"""Mentor session booking, lifecycle and join workflow."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.base import new_id
from models.mentor_session import MentorSession
from repositories.mentor_session_repo import MentorSessionRepository
from services.call_token import CallTokenMinter
from services.email_service import EmailSender, build_session_confirmation_email
from services.errors import ForbiddenError, InvalidRequestError, NotFoundError
from services.join_policy import JOINABLE_STATUSES, duration_minutes, evaluate_join
from services.serializers import session_to_dict

logger = logging.getLogger(__name__)

EDITABLE_STATUSES = ("scheduled", "ongoing", "completed", "cancelled")
DEMO_SESSION_THRESHOLD = 3
MEETING_BASE_URL = "https://meet.jit.si/aureeture-"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _require_booking_fields(mentor_id, student_name, title, start_time, end_time) -> None:
    if not mentor_id or not student_name or not title or not start_time or not end_time:
        raise InvalidRequestError(
            "mentorId, studentName, title, startTime, and endTime are required."
        )


def _validated_window(start_time: datetime, end_time: datetime) -> tuple[datetime, datetime]:
    start, end = _as_utc(start_time), _as_utc(end_time)
    if end <= start:
        raise InvalidRequestError("Invalid startTime/endTime values.")
    return start, end


def channel_for(session: MentorSession) -> str:
    return f"session-{session.id}"


def partition_sessions(
    sessions: List[MentorSession], now: datetime
) -> Dict[str, List[Dict[str, Any]]]:
    """Split sessions into upcoming and past views.

    A live session (scheduled/ongoing) that already ended shows up in both.
    """
    upcoming = [
        s for s in sessions if s.start_time >= now or s.status in ("scheduled", "ongoing")
    ]
    past = [s for s in sessions if s.end_time < now or s.status in ("completed", "cancelled")]
    return {
        "upcoming": [session_to_dict(s) for s in upcoming],
        "past": [session_to_dict(s) for s in past],
    }


def _scope_bounds(scope: str, now: datetime) -> tuple[Optional[datetime], Optional[datetime]]:
    if scope == "upcoming":
        return now, None
    if scope == "past":
        return None, now
    return None, None


async def ensure_demo_sessions(
    session: AsyncSession, mentor_id: str, now: datetime, force: bool = False
) -> int:
    """Give a mentor three example sessions for UI demos. Returns how many were created."""
    repo = MentorSessionRepository(session)
    if not force and await repo.count_for_mentor(mentor_id) >= DEMO_SESSION_THRESHOLD:
        return 0

    stamp = int(now.timestamp() * 1000)
    suffix = mentor_id[-8:]
    tomorrow = now + timedelta(days=1)
    demo = [
        MentorSession(
            mentor_id=mentor_id,
            student_name="Rishabh Jain",
            student_email="rishabh@example.com",
            student_id="student_rishabh_123",
            title="Frontend Portfolio Review",
            description="Deep dive on React portfolio and project storytelling.",
            start_time=now + timedelta(minutes=30),
            end_time=now + timedelta(minutes=75),
            duration_minutes=45,
            status="scheduled",
            payment_status="paid",
            booking_type="paid",
            meeting_link="https://meet.aureeture.ai/session/rishabh-1",
            agora_channel=f"session-{stamp}-{suffix}-1",
            amount=1500,
            currency="INR",
            payment_id="pay_rishabh_001",
        ),
        MentorSession(
            mentor_id=mentor_id,
            student_name="Aditi Rao",
            student_email="aditi@example.com",
            student_id="student_aditi_456",
            title="System Design Mock Interview",
            description="Practice high-signal system design interview questions.",
            start_time=now - timedelta(hours=2),
            end_time=now - timedelta(hours=1),
            started_at=now - timedelta(hours=2),
            ended_at=now - timedelta(hours=1),
            duration_minutes=60,
            status="completed",
            payment_status="paid",
            booking_type="paid",
            meeting_link="https://meet.aureeture.ai/session/aditi-1",
            agora_channel=f"session-{stamp}-{suffix}-2",
            recording_url="https://recordings.aureeture.ai/aditi-1",
            notes="Strong on fundamentals. Needs crisper trade-off communication.",
            amount=2000,
            currency="INR",
            payment_id="pay_aditi_002",
        ),
        MentorSession(
            mentor_id=mentor_id,
            student_name="Karan Patel",
            student_email="karan@example.com",
            student_id="student_karan_789",
            title="Career Roadmap Strategy",
            description="Clarify next 12-18 month plan for roles and skills.",
            start_time=tomorrow,
            end_time=tomorrow + timedelta(minutes=30),
            duration_minutes=30,
            status="scheduled",
            payment_status="paid",
            booking_type="paid",
            meeting_link="https://meet.aureeture.ai/session/karan-1",
            agora_channel=f"session-{stamp}-{suffix}-3",
            amount=1000,
            currency="INR",
            payment_id="pay_karan_003",
        ),
    ]
    for row in demo:
        await repo.add(row)
    logger.info("Seeded %d demo sessions for mentor %s", len(demo), mentor_id)
    return len(demo)


async def create_demo_sessions(
    session: AsyncSession, mentor_id: str, now: datetime
) -> Dict[str, Any]:
    await ensure_demo_sessions(session, mentor_id, now, force=True)
    sessions = await MentorSessionRepository(session).list_for_mentor(mentor_id)
    return {
        "message": "Demo sessions created successfully",
        "count": len(sessions),
        "sessions": [session_to_dict(s) for s in sessions],
    }


async def list_mentor_sessions(
    session: AsyncSession,
    mentor_id: str,
    scope: str,
    now: datetime,
    seed_demo: bool = False,
) -> Dict[str, List[Dict[str, Any]]]:
    if seed_demo:
        await ensure_demo_sessions(session, mentor_id, now)
    start_from, end_before = _scope_bounds(scope, now)
    sessions = await MentorSessionRepository(session).list_for_mentor(
        mentor_id, start_from=start_from, end_before=end_before
    )
    return partition_sessions(sessions, now)


async def list_student_sessions(
    session: AsyncSession, student_id: str, scope: str, now: datetime
) -> Dict[str, List[Dict[str, Any]]]:
    start_from, end_before = _scope_bounds(scope, now)
    sessions = await MentorSessionRepository(session).list_for_student(
        student_id, start_from=start_from, end_before=end_before
    )
    return partition_sessions(sessions, now)


async def get_mentor_session(session: AsyncSession, id: str, mentor_id: str) -> Dict[str, Any]:
    row = await MentorSessionRepository(session).get_for_mentor(id, mentor_id)
    if row is None:
        raise NotFoundError("Session not found")
    return session_to_dict(row)


async def get_student_session(session: AsyncSession, id: str, student_id: str) -> Dict[str, Any]:
    row = await MentorSessionRepository(session).get_for_student(id, student_id)
    if row is None:
        raise NotFoundError("Session not found")
    return session_to_dict(row)


async def create_session(
    session: AsyncSession,
    *,
    mentor_id: Optional[str],
    student_name: Optional[str],
    title: Optional[str],
    start_time: Optional[datetime],
    end_time: Optional[datetime],
    student_id: Optional[str] = None,
    student_email: Optional[str] = None,
    description: Optional[str] = None,
    meeting_link: Optional[str] = None,
) -> Dict[str, Any]:
    """Book a session. Payment stays pending until confirmed."""
    _require_booking_fields(mentor_id, student_name, title, start_time, end_time)
    start, end = _validated_window(start_time, end_time)

    session_id = new_id()
    row = MentorSession(
        id=session_id,
        mentor_id=mentor_id,
        student_id=student_id,
        student_name=student_name,
        student_email=student_email,
        title=title,
        description=description,
        start_time=start,
        end_time=end,
        duration_minutes=duration_minutes(start, end),
        status="scheduled",
        payment_status="pending",
        meeting_link=meeting_link or f"{MEETING_BASE_URL}session-{session_id}",
    )
    await MentorSessionRepository(session).add(row)
    logger.info("Created session %s for mentor %s", row.id, mentor_id)
    return session_to_dict(row)


async def update_session(
    session: AsyncSession,
    id: str,
    mentor_id: str,
    *,
    status: Optional[str] = None,
    start_time: Optional[datetime] = None,
    end_time: Optional[datetime] = None,
    notes: Optional[str] = None,
    meeting_link: Optional[str] = None,
    recording_url: Optional[str] = None,
) -> Dict[str, Any]:
    if status and status not in EDITABLE_STATUSES:
        raise InvalidRequestError("Invalid status value.")
    window = None
    if start_time or end_time:
        if not start_time or not end_time:
            raise InvalidRequestError(
                "Both startTime and endTime are required when rescheduling."
            )
        window = _validated_window(start_time, end_time)

    row = await MentorSessionRepository(session).get_for_mentor(id, mentor_id)
    if row is None:
        raise NotFoundError("Session not found")

    if status:
        row.status = status
    if window is not None:
        row.start_time, row.end_time = window
        row.duration_minutes = duration_minutes(*window)
        row.reschedule_count = (row.reschedule_count or 0) + 1
    if notes is not None:
        row.notes = notes
    if meeting_link is not None:
        row.meeting_link = meeting_link
    if recording_url is not None:
        row.recording_url = recording_url
    await session.flush()
    return session_to_dict(row)


async def verify_join(
    session: AsyncSession, id: str, mentor_id: str, now: datetime
) -> Dict[str, Any]:
    """Check the join window for a mentor and open the session on first success."""
    row = await MentorSessionRepository(session).get_for_mentor(id, mentor_id)
    if row is None:
        raise NotFoundError("Session not found")

    decision = evaluate_join(row.payment_status, row.status, row.start_time, row.end_time, now)
    if not decision.can_join:
        payload: Dict[str, Any] = {"canJoin": False}
        if decision.minutes_until_join is not None:
            payload["minutesUntilJoin"] = decision.minutes_until_join
        raise ForbiddenError(decision.reason or "Cannot join.", payload)

    if row.status == "scheduled":
        row.status = "ongoing"
    if not row.agora_channel:
        row.agora_channel = channel_for(row)
    await session.flush()

    return {
        "canJoin": True,
        "meetingLink": row.meeting_link,
        "sessionId": row.id,
        "channelName": row.agora_channel,
        "role": "host",
    }


async def join_session(
    session: AsyncSession,
    session_id: Optional[str],
    user_id: Optional[str],
    minter: CallTokenMinter,
    now: datetime,
) -> Dict[str, Any]:
    """Mint a call credential for a participant. CallTokenError propagates to the caller."""
    if not session_id or not user_id:
        raise InvalidRequestError("sessionId and userId are required")

    row = await MentorSessionRepository(session).get_by_id(session_id)
    if row is None:
        raise NotFoundError("Session not found")

    is_mentor = row.mentor_id == user_id
    is_mentee = row.student_id is not None and row.student_id == user_id
    if not is_mentor and not is_mentee:
        raise ForbiddenError("Unauthorized. You are not part of this session.")
    if row.status not in JOINABLE_STATUSES:
        raise ForbiddenError(f"Session is {row.status}. Cannot join.")

    if not row.agora_channel:
        row.agora_channel = channel_for(row)
    role = "mentor" if is_mentor else "mentee"

    token = minter.mint(channel_name=row.agora_channel, uid=user_id, role=role)

    if is_mentor and row.status == "scheduled":
        row.status = "ongoing"
        row.started_at = now
    await session.flush()

    return {
        "sessionId": row.id,
        "channelName": row.agora_channel,
        "agoraToken": token,
        "uid": user_id,
        "role": role,
        "recordingEnabled": is_mentor,
        "agoraAppId": minter.app_id,
    }


async def set_recording(
    session: AsyncSession, session_id: Optional[str], user_id: Optional[str], started: bool
) -> Dict[str, Any]:
    if not session_id or not user_id:
        raise InvalidRequestError("sessionId and userId are required")
    row = await MentorSessionRepository(session).get_by_id(session_id)
    if row is None:
        raise NotFoundError("Session not found")
    if row.mentor_id != user_id:
        verb = "start" if started else "stop"
        raise ForbiddenError(f"Only the mentor can {verb} recording.")
    return {
        "sessionId": row.id,
        "recording": "started" if started else "stopped",
        "recordingUrl": row.recording_url,
    }


async def complete_session(
    session: AsyncSession, id: str, mentor_id: str, now: datetime
) -> Dict[str, Any]:
    row = await MentorSessionRepository(session).get_for_mentor(id, mentor_id)
    if row is None:
        raise NotFoundError("Session not found")
    row.status = "completed"
    row.ended_at = now
    await session.flush()
    return session_to_dict(row)


async def delete_session(session: AsyncSession, id: str, mentor_id: str) -> None:
    repo = MentorSessionRepository(session)
    row = await repo.get_for_mentor(id, mentor_id)
    if row is None:
        raise NotFoundError("Session not found")
    await repo.delete(row)


async def confirm_payment(
    session: AsyncSession,
    email_sender: EmailSender,
    now: datetime,
    *,
    mentor_id: Optional[str],
    student_name: Optional[str],
    title: Optional[str],
    start_time: Optional[datetime],
    end_time: Optional[datetime],
    student_id: Optional[str] = None,
    student_email: Optional[str] = None,
    description: Optional[str] = None,
    amount: Optional[float] = None,
    payment_id: Optional[str] = None,
    mentor_email: Optional[str] = None,
    mentor_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a paid session and notify both parties by email."""
    _require_booking_fields(mentor_id, student_name, title, start_time, end_time)
    start, end = _validated_window(start_time, end_time)

    stamp = int(now.timestamp() * 1000)
    meeting_link = f"{MEETING_BASE_URL}session-{stamp}"
    row = MentorSession(
        mentor_id=mentor_id,
        student_id=student_id,
        student_name=student_name,
        student_email=student_email,
        title=title,
        description=description,
        start_time=start,
        end_time=end,
        duration_minutes=duration_minutes(start, end),
        status="scheduled",
        payment_status="paid",
        booking_type="paid",
        meeting_link=meeting_link,
        agora_channel=f"session-{stamp}-{mentor_id[-8:]}",
        amount=amount,
        payment_id=payment_id,
    )
    await MentorSessionRepository(session).add(row)
    logger.info("Payment confirmed; session %s booked for mentor %s", row.id, mentor_id)

    if student_email:
        content = build_session_confirmation_email(
            student_name, title, mentor_name or "Your Mentor", start, end, meeting_link, False
        )
        await email_sender.send(student_email, content.subject, content.html)
    if mentor_email:
        content = build_session_confirmation_email(
            mentor_name or "Mentor", title, student_name, start, end, meeting_link, True
        )
        await email_sender.send(mentor_email, content.subject, content.html)

    return {"session": session_to_dict(row), "message": "Session confirmed and notifications sent"}
