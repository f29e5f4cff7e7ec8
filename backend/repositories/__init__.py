"""Repository layer for DB access only (CRUD + simple queries).

Repositories are pure DB access - no business logic. All repositories accept
an AsyncSession explicitly and never commit.
"""

from .base import BaseRepository
from .availability_repo import AvailabilityRepository
from .mentor_session_repo import MentorSessionRepository
from .profile_repo import ProfileRepository
from .project_repo import ProjectRepository
from .user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "AvailabilityRepository",
    "MentorSessionRepository",
    "ProfileRepository",
    "ProjectRepository",
    "UserRepository",
]
