"""Marketing forms: leads, enterprise demo requests, contact messages."""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest
from sqlalchemy import select

from models.contact import ContactMessage, EnterpriseDemo, Lead


@pytest.mark.asyncio
async def test_lead_is_stored(client, db) -> None:
    r = await client.post(
        "/api/leads",
        json={
            "name": "Priya",
            "email": "priya@example.com",
            "mobile": "+91 90000 00000",
            "utm": {"source": "newsletter"},
            "page": "/pricing",
        },
    )
    assert r.status_code == 201
    assert r.json() == {"message": "Lead saved successfully!"}

    async with db.session() as s:
        leads = (await s.execute(select(Lead))).scalars().all()
    assert len(leads) == 1
    assert leads[0].utm == {"source": "newsletter"}
    assert leads[0].source == "website-modal"


@pytest.mark.asyncio
async def test_enterprise_demo_and_contact(client, db) -> None:
    r = await client.post(
        "/api/enterprise-demo",
        json={"name": "Sam", "email": "sam@example.com", "company": "Acme"},
    )
    assert r.status_code == 201
    assert r.json() == {"message": "Demo request saved successfully!"}

    r = await client.post(
        "/api/contact",
        json={"name": "Sam", "email": "sam@example.com", "subject": "Hi", "message": "Hello there"},
    )
    assert r.status_code == 201
    assert r.json() == {"message": "Message saved successfully!"}

    async with db.session() as s:
        assert len((await s.execute(select(EnterpriseDemo))).scalars().all()) == 1
        assert len((await s.execute(select(ContactMessage))).scalars().all()) == 1


@pytest.mark.asyncio
async def test_invalid_submissions_are_400(client) -> None:
    r = await client.post("/api/leads", json={"name": "Priya", "email": "priya@example.com"})
    assert r.status_code == 400
    assert r.json() == {"detail": "mobile is required"}

    r = await client.post(
        "/api/contact",
        json={"name": "Sam", "email": "not-an-email", "subject": "Hi", "message": "Hello"},
    )
    assert r.status_code == 400
    assert r.json()["detail"].startswith("email:")
