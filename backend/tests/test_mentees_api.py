"""Mentor mentees: roster, detail lookup by id or name, messages."""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

MENTOR = "user_mentor_roster"


async def _book(client, name: str, start: str, end: str, student_id=None) -> dict:
    body = {
        "mentorId": MENTOR,
        "studentName": name,
        "title": f"Session with {name}",
        "startTime": start,
        "endTime": end,
    }
    if student_id:
        body["studentId"] = student_id
    r = await client.post("/api/mentor-sessions", json=body)
    assert r.status_code == 201
    return r.json()


@pytest.mark.asyncio
async def test_roster_lists_each_mentee_once(client) -> None:
    first = await _book(client, "Aditi Rao", "2025-01-02T10:00:00Z", "2025-01-02T11:00:00Z", "stu_aditi")
    await client.post(f"/api/mentor-sessions/{first['id']}/complete", params={"mentorId": MENTOR})
    await _book(client, "Aditi Rao", "2025-01-09T10:00:00Z", "2025-01-09T11:00:00Z", "stu_aditi")
    await _book(client, "Karan Patel", "2025-01-03T10:00:00Z", "2025-01-03T11:00:00Z")

    r = await client.get("/api/mentor-mentees", params={"mentorId": MENTOR})
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 2
    aditi, karan = data["mentees"]
    assert aditi["id"] == "stu_aditi"
    assert aditi["progress"] == 50
    assert aditi["status"] == "Active"
    assert aditi["nextSession"] == "9 Jan, 10:00"
    assert karan["id"] == "mentee-Karan Patel"
    assert karan["status"] == "New"


@pytest.mark.asyncio
async def test_roster_is_empty_without_demo_seeding(client) -> None:
    r = await client.get("/api/mentor-mentees", params={"mentorId": MENTOR})
    assert r.json() == {"mentees": [], "total": 0}


@pytest.mark.asyncio
async def test_detail_by_student_id_or_name(client) -> None:
    await _book(client, "Karan Patel", "2025-01-03T10:00:00Z", "2025-01-03T11:00:00Z")

    r = await client.get("/api/mentor-mentees/karan", params={"mentorId": MENTOR})
    assert r.status_code == 200
    assert r.json()["name"] == "Karan Patel"
    assert r.json()["lastSession"] == "Never"
    assert len(r.json()["milestones"]) == 3

    r = await client.get("/api/mentor-mentees/stu_nobody", params={"mentorId": MENTOR})
    assert r.status_code == 404
    assert r.json() == {"detail": "Mentee not found"}


@pytest.mark.asyncio
async def test_send_message(client) -> None:
    r = await client.post(
        "/api/mentor-mentees/stu_aditi/message",
        json={"mentorId": MENTOR, "message": "  See you Thursday  "},
    )
    assert r.status_code == 201
    data = r.json()
    assert data["menteeId"] == "stu_aditi"
    assert data["message"] == "See you Thursday"
    assert data["createdAt"].endswith("Z")

    r = await client.post("/api/mentor-mentees/stu_aditi/message", json={"mentorId": MENTOR})
    assert r.status_code == 400
    assert r.json() == {"detail": "mentorId and message are required"}


@pytest.mark.asyncio
async def test_detail_accepts_roster_id_of_unregistered_mentee(client) -> None:
    await _book(client, "Aditi Rao", "2025-01-03T10:00:00Z", "2025-01-03T11:00:00Z")

    r = await client.get("/api/mentor-mentees", params={"mentorId": MENTOR})
    roster_id = r.json()["mentees"][0]["id"]
    assert roster_id == "mentee-Aditi Rao"

    r = await client.get(f"/api/mentor-mentees/{roster_id}", params={"mentorId": MENTOR})
    assert r.status_code == 200
    assert r.json()["id"] == roster_id
    assert r.json()["name"] == "Aditi Rao"
