"""SQLAlchemy models for the mentorship platform.

Importing this package registers every table on ``Base.metadata``.
"""

from .base import Base
from .availability import AvailabilityOverride, MentorAvailability, WeeklySlot
from .contact import ContactMessage, EnterpriseDemo, Lead
from .mentor_session import MentorSession
from .message import MentorMenteeMessage
from .profile import Profile
from .project import Project, ProjectParticipant
from .user import User

__all__ = [
    "Base",
    "AvailabilityOverride",
    "ContactMessage",
    "EnterpriseDemo",
    "Lead",
    "MentorAvailability",
    "MentorMenteeMessage",
    "MentorSession",
    "Profile",
    "Project",
    "ProjectParticipant",
    "User",
    "WeeklySlot",
]
