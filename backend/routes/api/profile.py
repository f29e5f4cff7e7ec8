"""/api/profile: the authenticated user's career profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import require_auth
from core.dependencies import get_db_session
from services import profile_service
from services.identity import AuthContext

from .schemas import ProfileBody

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(
    auth: AuthContext = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return {"profile": await profile_service.get_user_profile(session, auth.user_id)}


@router.post("", status_code=201)
async def post_profile(
    body: ProfileBody,
    auth: AuthContext = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await profile_service.create_user_profile(
        session, auth.user_id, body.model_dump(exclude_unset=True)
    )


@router.put("")
async def put_profile(
    body: ProfileBody,
    auth: AuthContext = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await profile_service.update_user_profile(
        session, auth.user_id, body.model_dump(exclude_unset=True)
    )
