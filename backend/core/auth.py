"""Bearer-token authentication against the identity provider."""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from services.identity import AuthContext, IdentityError, IdentityProvider
from services.user_service import ensure_local_user

from .dependencies import get_db_session, get_identity_provider

logger = logging.getLogger(__name__)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


async def require_auth(
    request: Request,
    authorization: Optional[str] = Header(None),
    session: AsyncSession = Depends(get_db_session),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthContext:
    """Dependency: verify the bearer token and make sure a local user row exists."""
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(status_code=401, detail="Unauthorized: No token provided")
    try:
        auth = await provider.verify_token(token)
    except IdentityError as e:
        logger.info("Rejected bearer token: %s", e)
        raise HTTPException(status_code=401, detail="Unauthorized: Invalid token") from e

    request.state.auth = auth
    await ensure_local_user(session, provider, auth.user_id)
    return auth
