"""/api/mentor-availability: weekly template and bookable slots."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session, get_now
from services import availability_service
from services.errors import InvalidRequestError

from .schemas import AvailabilityBody

router = APIRouter(prefix="/mentor-availability", tags=["mentor-availability"])


def _parse_range_bound(name: str, value: Optional[str]) -> Optional[datetime]:
    """Accept a date (2025-01-06) or an ISO datetime; naive values are UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise InvalidRequestError(f"{name} must be an ISO date or datetime") from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@router.get("/slots", summary="Bookable slots for a mentor in a date range")
async def get_slots(
    mentor_id: str = Query(..., alias="mentorId"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    session: AsyncSession = Depends(get_db_session),
    now: datetime = Depends(get_now),
) -> dict:
    return await availability_service.list_slots(
        session,
        mentor_id,
        now,
        start=_parse_range_bound("startDate", start_date),
        end=_parse_range_bound("endDate", end_date),
    )


@router.get("")
async def get_availability(
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await availability_service.get_availability(session, mentor_id)


@router.put("", summary="Replace a mentor's weekly template and date overrides")
async def put_availability(
    body: AvailabilityBody,
    mentor_id: str = Query(..., alias="mentorId"),
    session: AsyncSession = Depends(get_db_session),
) -> dict:
    return await availability_service.replace_availability(
        session,
        mentor_id,
        weekly_slots=[w.model_dump() for w in body.weekly_slots],
        override_slots=[
            {"date": o.on_date, "is_blocked": o.is_blocked, "reason": o.reason}
            for o in body.override_slots
        ],
        timezone_name=body.timezone,
    )
