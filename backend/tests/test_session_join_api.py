"""Session join: call credentials, participant roles, recording controls, error mapping."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

from core.dependencies import get_call_token_minter
from models.mentor_session import MentorSession
from services.call_token import CallTokenMinter

MENTOR = "user_mentor_1"
STUDENT = "user_student_1"
NOW = datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc)


async def _session(db, status: str = "scheduled", channel=None) -> str:
    async with db.session() as s:
        row = MentorSession(
            mentor_id=MENTOR,
            student_id=STUDENT,
            student_name="Karan Patel",
            title="Career Roadmap",
            start_time=NOW + timedelta(hours=1),
            end_time=NOW + timedelta(hours=2),
            duration_minutes=60,
            status=status,
            payment_status="paid",
            meeting_link="https://meet.example.com/k",
            agora_channel=channel,
            recording_url="https://recordings.example.com/k",
        )
        s.add(row)
        await s.flush()
        return row.id


@pytest.mark.asyncio
async def test_mentor_join_mints_token_and_starts_session(client, db, minter) -> None:
    session_id = await _session(db)
    r = await client.post("/api/session/join", json={"sessionId": session_id, "userId": MENTOR})
    assert r.status_code == 200
    data = r.json()
    assert data["role"] == "mentor"
    assert data["recordingEnabled"] is True
    assert data["channelName"] == f"session-{session_id}"
    assert data["agoraAppId"] == "test-call-app"
    claims = minter.decode(data["agoraToken"])
    assert claims["channel"] == data["channelName"]
    assert claims["sub"] == MENTOR
    assert claims["role"] == "mentor"

    detail = await client.get(f"/api/mentor-sessions/{session_id}", params={"mentorId": MENTOR})
    assert detail.json()["status"] == "ongoing"
    assert detail.json()["startedAt"] == "2025-01-06T10:00:00.000Z"


@pytest.mark.asyncio
async def test_mentee_join_keeps_existing_channel_and_status(client, db) -> None:
    session_id = await _session(db, channel="session-fixed-channel")
    r = await client.post("/api/session/join", json={"sessionId": session_id, "userId": STUDENT})
    assert r.status_code == 200
    assert r.json()["role"] == "mentee"
    assert r.json()["recordingEnabled"] is False
    assert r.json()["channelName"] == "session-fixed-channel"

    detail = await client.get(f"/api/mentor-sessions/{session_id}", params={"mentorId": MENTOR})
    assert detail.json()["status"] == "scheduled"


@pytest.mark.asyncio
async def test_outsider_and_finished_sessions_are_forbidden(client, db) -> None:
    session_id = await _session(db)
    r = await client.post("/api/session/join", json={"sessionId": session_id, "userId": "user_x"})
    assert r.status_code == 403
    assert r.json()["detail"] == "Unauthorized. You are not part of this session."

    done = await _session(db, status="completed")
    r = await client.post("/api/session/join", json={"sessionId": done, "userId": MENTOR})
    assert r.status_code == 403
    assert r.json()["detail"] == "Session is completed. Cannot join."


@pytest.mark.asyncio
async def test_join_validates_input_and_existence(client) -> None:
    r = await client.post("/api/session/join", json={"sessionId": "abc"})
    assert r.status_code == 400
    assert r.json()["detail"] == "sessionId and userId are required"

    r = await client.post("/api/session/join", json={"sessionId": "missing", "userId": MENTOR})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_unconfigured_call_credentials_are_a_server_error(client, db) -> None:
    from main import app

    session_id = await _session(db)
    app.dependency_overrides[get_call_token_minter] = lambda: CallTokenMinter("", "")
    r = await client.post("/api/session/join", json={"sessionId": session_id, "userId": MENTOR})
    assert r.status_code == 500
    assert "AGORA_APP_ID" in r.json()["detail"]


@pytest.mark.asyncio
async def test_unexpected_errors_return_generic_500(client, db) -> None:
    from main import app

    def _broken_minter():
        raise RuntimeError("boom")

    app.dependency_overrides[get_call_token_minter] = _broken_minter
    r = await client.post("/api/session/join", json={"sessionId": "x", "userId": MENTOR})
    assert r.status_code == 500
    assert r.json() == {"detail": "An error occurred on the server."}


@pytest.mark.asyncio
async def test_only_mentor_controls_recording(client, db) -> None:
    session_id = await _session(db)
    r = await client.post(
        "/api/session/recording/start", json={"sessionId": session_id, "userId": MENTOR}
    )
    assert r.status_code == 200
    assert r.json() == {
        "sessionId": session_id,
        "recording": "started",
        "recordingUrl": "https://recordings.example.com/k",
    }

    r = await client.post(
        "/api/session/recording/stop", json={"sessionId": session_id, "userId": STUDENT}
    )
    assert r.status_code == 403
    assert r.json()["detail"] == "Only the mentor can stop recording."
