"""HTTP API mounted under /api."""

from fastapi import APIRouter

from .auth import router as auth_router
from .availability import router as availability_router
from .caro import router as caro_router
from .contact import router as contact_router
from .mentees import router as mentees_router
from .mentor_sessions import router as mentor_sessions_router
from .meta import router as meta_router
from .profile import router as profile_router
from .projects import router as projects_router
from .session_join import router as session_join_router
from .student_sessions import router as student_sessions_router

router = APIRouter(prefix="/api")
router.include_router(auth_router)
router.include_router(availability_router)
router.include_router(caro_router)
router.include_router(contact_router)
router.include_router(mentees_router)
router.include_router(mentor_sessions_router)
router.include_router(meta_router)
router.include_router(profile_router)
router.include_router(projects_router)
router.include_router(session_join_router)
router.include_router(student_sessions_router)

api_router = router
