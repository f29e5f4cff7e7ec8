"""/api/mentor-sessions: booking, lifecycle and join verification for mentors."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.dependencies import get_app_settings, get_db_session, get_email_sender, get_now
from services import session_service
from services.email_service import EmailSender

from .schemas import ConfirmPaymentBody, SessionCreateBody, SessionUpdateBody

router = APIRouter(prefix="/mentor-sessions", tags=["mentor-sessions"])

Scope = Literal["all", "upcoming", "past"]


@router.post("/create-demo", summary="Seed three example sessions for a mentor")
async def post_create_demo(
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
    now: datetime = Depends(get_now),
) -> dict:
    return await session_service.create_demo_sessions(session, mentor_id, now)


@router.post(
    "/confirm-payment",
    status_code=201,
    summary="Create a paid session and email both parties",
)
async def post_confirm_payment(
    body: ConfirmPaymentBody,
    session: AsyncSession = Depends(get_db_session),
    email_sender: EmailSender = Depends(get_email_sender),
    now: datetime = Depends(get_now),
) -> dict:
    return await session_service.confirm_payment(
        session,
        email_sender,
        now,
        mentor_id=body.mentor_id,
        student_name=body.student_name,
        title=body.title,
        start_time=body.start_time,
        end_time=body.end_time,
        student_id=body.student_id,
        student_email=body.student_email,
        description=body.description,
        amount=body.amount,
        payment_id=body.payment_id,
        mentor_email=body.mentor_email,
        mentor_name=body.mentor_name,
    )


@router.get("", summary="List a mentor's sessions split into upcoming and past")
async def get_mentor_sessions(
    mentor_id: str = Query(..., alias="mentorId"),
    scope: Scope = "all",
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
    now: datetime = Depends(get_now),
) -> dict:
    return await session_service.list_mentor_sessions(
        session, mentor_id, scope, now, seed_demo=settings.demo_sessions_enabled
    )


@router.post("", status_code=201, summary="Book a session")
async def post_mentor_session(
    body: SessionCreateBody,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    """
    Create a scheduled session with payment pending.

    - **mentorId**, **studentName**, **title**, **startTime**, **endTime** are required.
    - **endTime** must be after **startTime**; durationMinutes is derived.
    """
    return await session_service.create_session(
        session,
        mentor_id=body.mentor_id,
        student_name=body.student_name,
        title=body.title,
        start_time=body.start_time,
        end_time=body.end_time,
        student_id=body.student_id,
        student_email=body.student_email,
        description=body.description,
        meeting_link=body.meeting_link,
    )


@router.get("/{session_id}", summary="Get one of the mentor's sessions")
async def get_mentor_session(
    session_id: str,
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await session_service.get_mentor_session(session, session_id, mentor_id)


@router.patch("/{session_id}", summary="Update status, reschedule or edit notes")
async def patch_mentor_session(
    session_id: str,
    body: SessionUpdateBody,
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await session_service.update_session(
        session,
        session_id,
        mentor_id,
        status=body.status,
        start_time=body.start_time,
        end_time=body.end_time,
        notes=body.notes,
        meeting_link=body.meeting_link,
        recording_url=body.recording_url,
    )


@router.delete("/{session_id}", status_code=204, summary="Delete a session")
async def delete_mentor_session(
    session_id: str,
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    await session_service.delete_session(session, session_id, mentor_id)
    return Response(status_code=204)


@router.get(
    "/{session_id}/verify-join",
    summary="Check whether the mentor may join now",
    response_description="canJoin, meetingLink, channelName, role; 403 with a reason otherwise.",
)
async def get_verify_join(
    session_id: str,
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
    now: datetime = Depends(get_now),
) -> dict:
    return await session_service.verify_join(session, session_id, mentor_id, now)


@router.post("/{session_id}/complete", summary="Mark a session completed")
async def post_complete_session(
    session_id: str,
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
    now: datetime = Depends(get_now),
) -> dict:
    return await session_service.complete_session(session, session_id, mentor_id, now)
