"""/api/student-sessions: the student's side of the booking list."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session, get_now
from services import session_service

router = APIRouter(prefix="/student-sessions", tags=["student-sessions"])


@router.get("")
async def get_student_sessions(
    student_id: str = Query(..., alias="studentId"),
    scope: Literal["all", "upcoming", "past"] = "all",
    session: AsyncSession = Depends(get_db_session),
    now: datetime = Depends(get_now),
) -> dict:
    return await session_service.list_student_sessions(session, student_id, scope, now)


@router.get("/{session_id}")
async def get_student_session(
    session_id: str,
    student_id: str = Query(..., alias="studentId"),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await session_service.get_student_session(session, session_id, student_id)
