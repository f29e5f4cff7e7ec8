"""/api/auth: token verification for the frontend."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session, get_identity_provider
from services.identity import IdentityError, IdentityProvider
from services.serializers import user_to_dict
from services.user_service import ensure_local_user

from .schemas import TokenBody

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/verify", summary="Verify a session token and return the local user")
async def post_verify(
    body: TokenBody,
    session: AsyncSession = Depends(get_db_session),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> dict:
    try:
        auth = await provider.verify_token(body.token)
    except IdentityError as e:
        raise HTTPException(status_code=401, detail="Unauthorized: Invalid token") from e
    user = await ensure_local_user(session, provider, auth.user_id)
    return {
        "userId": auth.user_id,
        "sessionId": auth.session_id,
        "user": user_to_dict(user) if user else None,
    }
