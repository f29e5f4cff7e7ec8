from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.message import MentorMenteeMessage
from repositories.base import BaseRepository
from repositories.mentor_session_repo import MentorSessionRepository
from services.errors import InvalidRequestError, NotFoundError
from services.mentees import build_mentee_detail, build_roster
from services.serializers import iso
from services.session_service import ensure_demo_sessions

logger = logging.getLogger(__name__)


async def list_mentees(
    session: AsyncSession, mentor_id: str, now: datetime, seed_demo: bool = False
) -> Dict[str, Any]:
    if seed_demo:
        await ensure_demo_sessions(session, mentor_id, now)
    sessions = await MentorSessionRepository(session).list_for_mentor(mentor_id, newest_first=True)
    mentees = build_roster(sessions, now)
    return {"mentees": mentees, "total": len(mentees)}


async def get_mentee(
    session: AsyncSession, mentor_id: str, mentee_id: str, now: datetime
) -> Dict[str, Any]:
    sessions = await MentorSessionRepository(session).list_for_mentee(mentor_id, mentee_id)
    if not sessions:
        raise NotFoundError("Mentee not found")
    return build_mentee_detail(sessions, now)


async def send_message(
    session: AsyncSession, mentor_id: Optional[str], mentee_id: str, message: Optional[str]
) -> Dict[str, Any]:
    text = (message or "").strip()
    if not mentor_id or not text:
        raise InvalidRequestError("mentorId and message are required")
    row = await BaseRepository(session).add(
        MentorMenteeMessage(mentor_id=mentor_id, mentee_id=mentee_id, message=text)
    )
    logger.info("Mentor %s messaged mentee %s", mentor_id, mentee_id)
    return {
        "id": row.id,
        "mentorId": row.mentor_id,
        "menteeId": row.mentee_id,
        "message": row.message,
        "createdAt": iso(row.created_at),
    }
