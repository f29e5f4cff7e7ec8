"""Mentor availability template and bookable slot listing."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.availability import WEEKDAYS, AvailabilityOverride, MentorAvailability, WeeklySlot
from repositories.availability_repo import AvailabilityRepository
from repositories.mentor_session_repo import MentorSessionRepository
from services.errors import InvalidRequestError, NotFoundError
from services.serializers import iso
from services.slots import WeeklyWindow, enumerate_slots, parse_hhmm

logger = logging.getLogger(__name__)

DEFAULT_RANGE_DAYS = 7


async def list_slots(
    session: AsyncSession,
    mentor_id: str,
    now: datetime,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """Enumerate slots in the range and flag the ones an existing session overlaps."""
    repo = AvailabilityRepository(session)
    availability = await repo.get_by_mentor(mentor_id)
    if availability is None:
        raise NotFoundError("Mentor availability not found")

    range_start = start or now
    range_end = end or (range_start + timedelta(days=DEFAULT_RANGE_DAYS))

    weekly = [
        WeeklyWindow(w.day, w.start_time, w.end_time, w.is_active)
        for w in await repo.list_weekly_slots(availability.id)
    ]
    blocked = [o.on_date for o in await repo.list_overrides(availability.id) if o.is_blocked]
    candidates = enumerate_slots(weekly, blocked, range_start.date(), range_end.date())

    sessions = MentorSessionRepository(session)
    slots: List[Dict[str, Any]] = []
    for slot in candidates:
        booked = await sessions.find_overlapping(mentor_id, slot.start, slot.end)
        slots.append(
            {
                "id": slot.id,
                "startTime": iso(slot.start),
                "endTime": iso(slot.end),
                "isAvailable": True,
                "isBooked": booked is not None,
            }
        )
    return {"slots": slots}


async def _serialize(repo: AvailabilityRepository, availability: MentorAvailability) -> Dict[str, Any]:
    weekly = await repo.list_weekly_slots(availability.id)
    overrides = await repo.list_overrides(availability.id)
    return {
        "mentorId": availability.mentor_id,
        "timezone": availability.timezone,
        "weeklySlots": [
            {"day": w.day, "startTime": w.start_time, "endTime": w.end_time, "isActive": w.is_active}
            for w in weekly
        ],
        "overrideSlots": [
            {"date": o.on_date.isoformat(), "isBlocked": o.is_blocked, "reason": o.reason}
            for o in overrides
        ],
    }


async def get_availability(session: AsyncSession, mentor_id: str) -> Dict[str, Any]:
    repo = AvailabilityRepository(session)
    availability = await repo.get_by_mentor(mentor_id)
    if availability is None:
        raise NotFoundError("Mentor availability not found")
    return await _serialize(repo, availability)


def _check_window(day: str, start_time: str, end_time: str) -> None:
    if day not in WEEKDAYS:
        raise InvalidRequestError(f"Invalid day: {day}")
    try:
        start = parse_hhmm(start_time)
        end = parse_hhmm(end_time)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e
    if end <= start:
        raise InvalidRequestError(f"endTime must be after startTime for {day}")


async def replace_availability(
    session: AsyncSession,
    mentor_id: str,
    weekly_slots: List[Dict[str, Any]],
    override_slots: List[Dict[str, Any]],
    timezone_name: str = "UTC",
) -> Dict[str, Any]:
    """Replace the whole weekly template and override list for a mentor."""
    for w in weekly_slots:
        _check_window(w["day"], w["start_time"], w["end_time"])

    repo = AvailabilityRepository(session)
    availability = await repo.get_by_mentor(mentor_id)
    if availability is None:
        availability = await repo.add(MentorAvailability(mentor_id=mentor_id, timezone=timezone_name))
    else:
        availability.timezone = timezone_name
        await repo.clear_template(availability.id)

    for w in weekly_slots:
        session.add(
            WeeklySlot(
                availability_id=availability.id,
                day=w["day"],
                start_time=w["start_time"],
                end_time=w["end_time"],
                is_active=w.get("is_active", True),
            )
        )
    seen: set[date] = set()
    for o in override_slots:
        if o["date"] in seen:
            raise InvalidRequestError(f"Duplicate override for {o['date'].isoformat()}")
        seen.add(o["date"])
        session.add(
            AvailabilityOverride(
                availability_id=availability.id,
                on_date=o["date"],
                is_blocked=o.get("is_blocked", True),
                reason=o.get("reason"),
            )
        )
    await session.flush()
    logger.info(
        "Availability for mentor %s replaced: %d weekly, %d overrides",
        mentor_id,
        len(weekly_slots),
        len(override_slots),
    )
    return await _serialize(repo, availability)
