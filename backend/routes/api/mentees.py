"""/api/mentor-mentees: roster and progress derived from sessions."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.dependencies import get_app_settings, get_db_session, get_now
from services import mentee_service

from .schemas import MenteeMessageBody

router = APIRouter(prefix="/mentor-mentees", tags=["mentor-mentees"])


@router.get("")
async def get_mentees(
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
    now: datetime = Depends(get_now),
) -> dict:
    return await mentee_service.list_mentees(
        session, mentor_id, now, seed_demo=settings.demo_sessions_enabled
    )


@router.get("/{mentee_id}")
async def get_mentee(
    mentee_id: str,
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
    now: datetime = Depends(get_now),
) -> dict:
    return await mentee_service.get_mentee(session, mentor_id, mentee_id, now)


@router.post("/{mentee_id}/message", status_code=201)
async def post_mentee_message(
    mentee_id: str,
    body: MenteeMessageBody,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await mentee_service.send_message(session, body.mentor_id, mentee_id, body.message)
