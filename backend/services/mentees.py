"""Read-time mentee roster and progress derived from a mentor's sessions."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

from models.mentor_session import MENTEE_ID_PREFIX, MentorSession
from services.join_policy import round_half_up

AVATAR_URL = "https://api.dicebear.com/7.x/avataaars/svg?seed="
DEFAULT_GOAL = "Career development"

MILESTONES = (
    ("m1", "Complete Data Structures & Algorithms",
     "Master core DSA concepts and solve 200+ problems", 25, 30),
    ("m2", "System Design Fundamentals",
     "Learn distributed systems, scalability, and design patterns", 50, 60),
    ("m3", "Mock Interviews", "Complete 10 mock interviews with feedback", 75, 90),
)


def mentee_key(s: MentorSession) -> str:
    return s.student_id or s.student_name


def progress_percent(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(100.0 * completed / total)


def mentee_status(next_session: Optional[MentorSession], completed: int) -> str:
    if next_session is not None:
        return "Active"
    if completed > 0:
        return "Paused"
    return "New"


def format_date(value: datetime) -> str:
    """e.g. 5 Jan 2025"""
    return f"{value.day} {value:%b %Y}"


def format_date_time(value: datetime) -> str:
    """e.g. 5 Jan, 14:30"""
    return f"{value.day} {value:%b}, {value:%H:%M}"


def avatar_url(name: str) -> str:
    return AVATAR_URL + quote(name, safe="")


def _next_session(sessions: Sequence[MentorSession], now: datetime) -> Optional[MentorSession]:
    future = [s for s in sessions if s.start_time > now]
    return min(future, key=lambda s: s.start_time) if future else None


def _summary(sessions: Sequence[MentorSession], now: datetime) -> Dict[str, Any]:
    completed = sum(1 for s in sessions if s.status == "completed")
    next_session = _next_session(sessions, now)
    return {
        "completed": completed,
        "progress": progress_percent(completed, len(sessions)),
        "next": next_session,
        "status": mentee_status(next_session, completed),
    }


def build_roster(sessions: Sequence[MentorSession], now: datetime) -> List[Dict[str, Any]]:
    """One entry per mentee, in order of each mentee's most recent session.

    ``sessions`` must be sorted newest first; the first row of a group is its
    most recent session.
    """
    groups: Dict[str, List[MentorSession]] = {}
    for s in sessions:
        groups.setdefault(mentee_key(s), []).append(s)

    roster = []
    for key, group in groups.items():
        latest = group[0]
        summary = _summary(group, now)
        roster.append(
            {
                "id": latest.student_id or f"{MENTEE_ID_PREFIX}{key}",
                "name": latest.student_name,
                "email": latest.student_email,
                "avatarUrl": avatar_url(latest.student_name),
                "goal": latest.title or DEFAULT_GOAL,
                "progress": summary["progress"],
                "lastSession": format_date(latest.start_time),
                "nextSession": format_date_time(summary["next"].start_time)
                if summary["next"]
                else None,
                "status": summary["status"],
                "studentId": latest.student_id,
            }
        )
    return roster


def _session_display_status(s: MentorSession, now: datetime) -> str:
    if s.status == "completed":
        return "completed"
    if s.start_time > now:
        return "upcoming"
    return "cancelled"


def build_mentee_detail(sessions: Sequence[MentorSession], now: datetime) -> Dict[str, Any]:
    """Detail view for one mentee; ``sessions`` is non-empty and sorted newest first."""
    first = sessions[0]
    summary = _summary(sessions, now)
    progress = summary["progress"]

    completed_sessions = [s for s in sessions if s.status == "completed"]
    last_completed = max(completed_sessions, key=lambda s: s.start_time) if completed_sessions else None

    milestones = [
        {
            "id": mid,
            "title": title,
            "description": description,
            "completed": progress >= threshold,
            "dueDate": format_date(now + timedelta(days=days)),
        }
        for mid, title, description, threshold, days in MILESTONES
    ]
    recent = [
        {
            "id": s.id,
            "date": format_date_time(s.start_time) if s.start_time > now else format_date(s.start_time),
            "title": s.title,
            "status": _session_display_status(s, now),
        }
        for s in sessions[:10]
    ]
    notes = next((s.notes for s in sessions if s.notes), None)

    return {
        "id": first.student_id or f"{MENTEE_ID_PREFIX}{first.student_name}",
        "name": first.student_name,
        "email": first.student_email,
        "avatarUrl": avatar_url(first.student_name),
        "goal": first.title or DEFAULT_GOAL,
        "progress": progress,
        "lastSession": format_date(last_completed.start_time) if last_completed else "Never",
        "nextSession": format_date_time(summary["next"].start_time) if summary["next"] else None,
        "status": summary["status"],
        "studentId": first.student_id,
        "milestones": milestones,
        "sessions": recent,
        "notes": notes,
    }
