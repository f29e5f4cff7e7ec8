"""Local user mirror for identity-provider accounts."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from repositories.user_repo import UserRepository
from services.identity import IdentityProvider

logger = logging.getLogger(__name__)


async def ensure_local_user(
    session: AsyncSession, provider: IdentityProvider, external_id: str
) -> Optional[User]:
    """Return the mirror row for ``external_id``, creating it on first sight.

    Hydration failures are logged and swallowed: the request continues without
    a local user and downstream lookups report "User not found" themselves.
    """
    repo = UserRepository(session)
    existing = await repo.get_by_external_id(external_id)
    if existing is not None:
        return existing

    try:
        details = await provider.fetch_user(external_id)
        user = await repo.add(
            User(
                external_id=external_id,
                email=details.email or f"{external_id}@unknown.local",
                name=details.full_name,
                avatar=details.image_url,
            )
        )
    except (httpx.HTTPError, SQLAlchemyError, ValueError) as e:
        logger.warning("Failed to auto-create local user for %s: %s", external_id, e)
        await session.rollback()
        return None

    logger.info("Created local user %s for identity %s", user.id, external_id)
    return user
