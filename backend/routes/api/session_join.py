"""/api/session: call credentials and recording controls for session participants."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_call_token_minter, get_db_session, get_now
from services import session_service
from services.call_token import CallTokenError, CallTokenMinter

from .schemas import SessionJoinBody

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


@router.post("/join", summary="Join a session and receive a video-call token")
async def post_join(
    body: SessionJoinBody,
    session: AsyncSession = Depends(get_db_session),
    minter: CallTokenMinter = Depends(get_call_token_minter),
    now: datetime = Depends(get_now),
) -> dict:
    try:
        return await session_service.join_session(session, body.session_id, body.user_id, minter, now)
    except CallTokenError as e:
        logger.error("Error generating call token for session %s: %s", body.session_id, e)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/recording/start")
async def post_recording_start(
    body: SessionJoinBody,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await session_service.set_recording(session, body.session_id, body.user_id, started=True)


@router.post("/recording/stop")
async def post_recording_stop(
    body: SessionJoinBody,
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await session_service.set_recording(session, body.session_id, body.user_id, started=False)
