"""Mentor availability: template replacement and slot listing with overrides and bookings."""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

MENTOR = "user_mentor_avail"

TEMPLATE = {
    "timezone": "Asia/Kolkata",
    "weeklySlots": [
        {"day": "Monday", "startTime": "09:00", "endTime": "17:00"},
        {"day": "Wednesday", "startTime": "14:00", "endTime": "16:00"},
        {"day": "Friday", "startTime": "10:00", "endTime": "12:00", "isActive": False},
    ],
    "overrideSlots": [{"date": "2025-01-08", "isBlocked": True, "reason": "Conference"}],
}


async def _put_template(client, body=TEMPLATE):
    return await client.put("/api/mentor-availability", params={"mentorId": MENTOR}, json=body)


@pytest.mark.asyncio
async def test_put_then_get_round_trips_template(client) -> None:
    r = await _put_template(client)
    assert r.status_code == 200
    assert r.json()["timezone"] == "Asia/Kolkata"
    assert len(r.json()["weeklySlots"]) == 3
    assert r.json()["overrideSlots"] == [
        {"date": "2025-01-08", "isBlocked": True, "reason": "Conference"}
    ]

    r = await client.get("/api/mentor-availability", params={"mentorId": MENTOR})
    assert r.status_code == 200
    assert r.json()["mentorId"] == MENTOR


@pytest.mark.asyncio
async def test_put_replaces_previous_template(client) -> None:
    await _put_template(client)
    r = await _put_template(
        client, {"weeklySlots": [{"day": "Tuesday", "startTime": "08:00", "endTime": "09:00"}]}
    )
    assert r.status_code == 200
    assert [w["day"] for w in r.json()["weeklySlots"]] == ["Tuesday"]
    assert r.json()["overrideSlots"] == []
    assert r.json()["timezone"] == "UTC"


@pytest.mark.asyncio
async def test_put_rejects_bad_windows(client) -> None:
    bad_day = {"weeklySlots": [{"day": "Funday", "startTime": "09:00", "endTime": "10:00"}]}
    r = await _put_template(client, bad_day)
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid day: Funday"

    reversed_window = {"weeklySlots": [{"day": "Monday", "startTime": "10:00", "endTime": "09:00"}]}
    r = await _put_template(client, reversed_window)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_slots_skip_blocked_and_inactive_days(client) -> None:
    await _put_template(client)
    r = await client.get(
        "/api/mentor-availability/slots",
        params={"mentorId": MENTOR, "startDate": "2025-01-06", "endDate": "2025-01-12"},
    )
    assert r.status_code == 200
    assert r.json()["slots"] == [
        {
            "id": "slot-1736121600000-9",
            "startTime": "2025-01-06T09:00:00.000Z",
            "endTime": "2025-01-06T17:00:00.000Z",
            "isAvailable": True,
            "isBooked": False,
        }
    ]


@pytest.mark.asyncio
async def test_overlapping_session_marks_slot_booked(client) -> None:
    await _put_template(client)
    booking = {
        "mentorId": MENTOR,
        "studentName": "Meera",
        "title": "Intro call",
        "startTime": "2025-01-13T16:30:00Z",
        "endTime": "2025-01-13T17:30:00Z",
    }
    assert (await client.post("/api/mentor-sessions", json=booking)).status_code == 201

    r = await client.get(
        "/api/mentor-availability/slots",
        params={"mentorId": MENTOR, "startDate": "2025-01-13", "endDate": "2025-01-15"},
    )
    slots = r.json()["slots"]
    assert [s["startTime"] for s in slots] == [
        "2025-01-13T09:00:00.000Z",
        "2025-01-15T14:00:00.000Z",
    ]
    assert [s["isBooked"] for s in slots] == [True, False]


@pytest.mark.asyncio
async def test_cancelled_session_does_not_book_slot(client) -> None:
    await _put_template(client)
    booking = {
        "mentorId": MENTOR,
        "studentName": "Meera",
        "title": "Intro call",
        "startTime": "2025-01-13T10:00:00Z",
        "endTime": "2025-01-13T11:00:00Z",
    }
    created = (await client.post("/api/mentor-sessions", json=booking)).json()
    await client.patch(
        f"/api/mentor-sessions/{created['id']}", params={"mentorId": MENTOR}, json={"status": "cancelled"}
    )
    r = await client.get(
        "/api/mentor-availability/slots",
        params={"mentorId": MENTOR, "startDate": "2025-01-13", "endDate": "2025-01-13"},
    )
    assert r.json()["slots"][0]["isBooked"] is False


@pytest.mark.asyncio
async def test_default_range_is_one_week_from_now(client) -> None:
    await _put_template(client)
    r = await client.get("/api/mentor-availability/slots", params={"mentorId": MENTOR})
    days = [s["startTime"][:10] for s in r.json()["slots"]]
    assert days == ["2025-01-06", "2025-01-13"]


@pytest.mark.asyncio
async def test_unknown_mentor_and_bad_dates(client) -> None:
    r = await client.get("/api/mentor-availability/slots", params={"mentorId": "nobody"})
    assert r.status_code == 404
    assert r.json() == {"detail": "Mentor availability not found"}

    await _put_template(client)
    r = await client.get(
        "/api/mentor-availability/slots", params={"mentorId": MENTOR, "startDate": "next week"}
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "startDate must be an ISO date or datetime"
