"""Join eligibility for a mentor session.

A session can be joined once payment is confirmed, while it is scheduled or
ongoing, from 15 minutes before its start until its end.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

JOIN_WINDOW = timedelta(minutes=15)
JOINABLE_STATUSES = ("scheduled", "ongoing")


@dataclass(frozen=True)
class JoinDecision:
    can_join: bool
    reason: Optional[str] = None
    minutes_until_join: Optional[int] = None


def round_half_up(value: float) -> int:
    """Round to nearest int with .5 going up (matches browser Math.round)."""
    return int(math.floor(value + 0.5))


def duration_minutes(start: datetime, end: datetime) -> int:
    return round_half_up((end - start).total_seconds() / 60.0)


def evaluate_join(
    payment_status: str,
    status: str,
    start_time: datetime,
    end_time: datetime,
    now: datetime,
) -> JoinDecision:
    """Decide whether a session can be joined at ``now``. Checks run in a fixed order."""
    if payment_status != "paid":
        return JoinDecision(
            False, "Payment not confirmed. Cannot join session until payment is confirmed."
        )
    if status not in JOINABLE_STATUSES:
        return JoinDecision(False, f"Session is {status}. Cannot join.")
    if now > end_time:
        return JoinDecision(False, "Session has ended.")
    opens_at = start_time - JOIN_WINDOW
    if now < opens_at:
        minutes = math.ceil((opens_at - now).total_seconds() / 60.0)
        return JoinDecision(
            False,
            "Session hasn't started yet. You can join 15 minutes before the scheduled time.",
            minutes,
        )
    return JoinDecision(True)
