# Ensure backend is at sys.path[0] when pytest runs (from repo root or from backend dir)
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List

_tests_dir = Path(__file__).resolve().parent
_backend = _tests_dir.parent
_str_backend = str(_backend)
if sys.path[0:1] != [_str_backend]:
    sys.path.insert(0, _str_backend)

import httpx  # noqa: E402
import jwt  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from core.config import Settings  # noqa: E402
from core.database import dispose_database, get_database_manager, init_database  # noqa: E402
from core.dependencies import (  # noqa: E402
    get_app_settings,
    get_call_token_minter,
    get_email_sender,
    get_identity_provider,
    get_now,
)
from services.call_token import CallTokenMinter  # noqa: E402
from services.email_service import EmailSender  # noqa: E402
from services.identity import IdentityProvider  # noqa: E402

# Monday 2025-01-06 10:00 UTC
FIXED_NOW = datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc)

IDENTITY_SECRET = "test-identity-secret-with-enough-length-for-hs256"
CALL_APP_ID = "test-call-app"
CALL_CERTIFICATE = "test-call-certificate-with-enough-length-for-hs256"


@dataclass
class Clock:
    now: datetime = FIXED_NOW


@dataclass
class Mailbox:
    """Records every request the email sender posts."""

    requests: List[httpx.Request] = field(default_factory=list)
    status_code: int = 202

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"id": f"msg_{len(self.requests)}"})


@dataclass
class IdentityDirectory:
    """Stands in for the identity provider's user API."""

    users: dict = field(default_factory=dict)
    fail: bool = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail:
            return httpx.Response(503, json={"error": "unavailable"})
        user_id = request.url.path.rsplit("/", 1)[-1]
        data = self.users.get(user_id)
        if data is None:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json=data)


def make_token(sub: str, exp_offset: int = 3600, secret: str = IDENTITY_SECRET, **extra) -> str:
    """HS256 session token; a negative exp_offset yields an expired token."""
    now = int(time.time())
    claims = {"sub": sub, "sid": f"sess_{sub}", "iat": now, "exp": now + exp_offset, **extra}
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def mailbox() -> Mailbox:
    return Mailbox()


@pytest.fixture
def directory() -> IdentityDirectory:
    return IdentityDirectory(
        users={
            "user_alice": {
                "id": "user_alice",
                "first_name": "Alice",
                "last_name": "Moreau",
                "image_url": "https://img.example.com/alice.png",
                "email_addresses": [{"email_address": "alice@example.com"}],
            },
            "user_bob": {
                "id": "user_bob",
                "first_name": "Bob",
                "last_name": None,
                "image_url": None,
                "email_addresses": [{"email_address": "bob@example.com"}],
            },
        }
    )


@pytest.fixture
def minter() -> CallTokenMinter:
    return CallTokenMinter(app_id=CALL_APP_ID, app_certificate=CALL_CERTIFICATE, ttl_seconds=3600)


@pytest_asyncio.fixture
async def db(tmp_path):
    """Fresh SQLite file per test, schema created through the DatabaseManager."""
    await dispose_database()
    await init_database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    manager = get_database_manager()
    await manager.create_schema()
    yield manager
    await dispose_database()


@pytest_asyncio.fixture
async def client(db, clock, mailbox, directory, minter):
    from main import app

    settings = Settings()
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[get_now] = lambda: clock.now
    app.dependency_overrides[get_email_sender] = lambda: EmailSender(
        api_url="https://mail.example.com/send",
        api_key="mail-key",
        sender="Aureeture <no-reply@example.com>",
        transport=httpx.MockTransport(mailbox.handler),
    )
    app.dependency_overrides[get_identity_provider] = lambda: IdentityProvider(
        jwt_key=IDENTITY_SECRET,
        secret_key="sk_test",
        api_url="https://identity.example.com/v1",
        transport=httpx.MockTransport(directory.handler),
    )
    app.dependency_overrides[get_call_token_minter] = lambda: minter
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def issue_token():
    return make_token
