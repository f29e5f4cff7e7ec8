"""Candidate slot enumeration from a weekly template and date overrides.

Days are UTC calendar days. A slot never spans midnight: "HH:MM" start and
end are both applied to the same day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from models.availability import WEEKDAYS


@dataclass(frozen=True)
class WeeklyWindow:
    day: str
    start_time: str
    end_time: str
    is_active: bool = True


@dataclass(frozen=True)
class CandidateSlot:
    id: str
    day: date
    start: datetime
    end: datetime


def parse_hhmm(value: str) -> Tuple[int, int]:
    """Parse "HH:MM" into (hour, minute). Raises ValueError on malformed input."""
    parts = value.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"time must be HH:MM, got {value!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"time out of range: {value!r}")
    return hour, minute


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def _day_start_ms(day: date) -> int:
    midnight = datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
    return int(midnight.timestamp() * 1000)


def enumerate_slots(
    weekly: Sequence[WeeklyWindow],
    blocked_dates: Iterable[date],
    start_day: date,
    end_day: date,
) -> List[CandidateSlot]:
    """One candidate slot per day in [start_day, end_day] that has an active weekly window.

    The first active window matching the weekday wins. Blocked dates are skipped.
    """
    blocked: Set[date] = set(blocked_dates)
    slots: List[CandidateSlot] = []
    day = start_day
    while day <= end_day:
        window = _active_window(weekly, weekday_name(day))
        if window is not None and day not in blocked:
            start_hour, start_min = parse_hhmm(window.start_time)
            end_hour, end_min = parse_hhmm(window.end_time)
            slots.append(
                CandidateSlot(
                    id=f"slot-{_day_start_ms(day)}-{start_hour}",
                    day=day,
                    start=datetime.combine(day, time(start_hour, start_min), tzinfo=timezone.utc),
                    end=datetime.combine(day, time(end_hour, end_min), tzinfo=timezone.utc),
                )
            )
        day += timedelta(days=1)
    return slots


def _active_window(weekly: Sequence[WeeklyWindow], day_name: str) -> Optional[WeeklyWindow]:
    for window in weekly:
        if window.day == day_name and window.is_active:
            return window
    return None
