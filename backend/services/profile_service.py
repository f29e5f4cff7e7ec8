from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from models.profile import Profile
from models.user import User
from repositories.profile_repo import ProfileRepository
from repositories.user_repo import UserRepository
from services.errors import InvalidRequestError, NotFoundError
from services.serializers import profile_to_dict

# Profile attributes a client may set; anything else in the payload is ignored.
PROFILE_FIELDS = (
    "career_stage",
    "long_term_goal",
    "personal_info",
    "work_history",
    "education",
    "projects",
    "skills",
    "preferences",
    "onboarding_complete",
)


async def _require_user(session: AsyncSession, external_id: str) -> User:
    user = await UserRepository(session).get_by_external_id(external_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def get_user_profile(session: AsyncSession, external_id: str) -> Dict[str, Any] | None:
    user = await _require_user(session, external_id)
    profile = await ProfileRepository(session).get_by_user_id(user.id)
    if profile is None:
        return None
    return profile_to_dict(profile, user)


async def create_user_profile(
    session: AsyncSession, external_id: str, data: Dict[str, Any]
) -> Dict[str, Any]:
    user = await _require_user(session, external_id)
    repo = ProfileRepository(session)
    if await repo.get_by_user_id(user.id) is not None:
        raise InvalidRequestError("Profile already exists")

    values = {k: v for k, v in data.items() if k in PROFILE_FIELDS and v is not None}
    profile = await repo.add(Profile(user_id=user.id, **values))
    return profile_to_dict(profile, user)


async def update_user_profile(
    session: AsyncSession, external_id: str, data: Dict[str, Any]
) -> Dict[str, Any]:
    user = await _require_user(session, external_id)
    profile = await ProfileRepository(session).get_by_user_id(user.id)
    if profile is None:
        raise NotFoundError("Profile not found")

    # null leaves the stored value unchanged; several columns are NOT NULL
    for key, value in data.items():
        if key in PROFILE_FIELDS and value is not None:
            setattr(profile, key, value)
    await session.flush()
    return profile_to_dict(profile, user)
