"""
Unit tests for Settings.from_env and required-variable reporting.
"""

from __future__ import annotations

import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

from core.config import DEFAULT_DATABASE_URL, REQUIRED_ENV, Settings

ALL_ENV = (
    "APP_NAME", "ENV", "DATABASE_URL", "LOG_LEVEL", "FRONTEND_URL", "CLERK_SECRET_KEY",
    "CLERK_JWT_KEY", "CLERK_API_URL", "REDIS_URL", "AGORA_APP_ID", "AGORA_APP_CERTIFICATE",
    "CALL_TOKEN_TTL_SECONDS", "EMAIL_API_URL", "EMAIL_API_KEY", "EMAIL_FROM",
    "DEMO_SESSIONS_ENABLED",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ALL_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_report_every_required_variable_but_database(clean_env) -> None:
    s = Settings.from_env()
    assert s.database_url == DEFAULT_DATABASE_URL
    assert s.demo_sessions_enabled is False
    missing = s.missing_required()
    assert "DATABASE_URL" not in missing
    assert set(missing) == set(REQUIRED_ENV.values()) - {"DATABASE_URL"}


def test_fully_configured_environment_has_nothing_missing(clean_env) -> None:
    clean_env.setenv("FRONTEND_URL", "https://app.example.com")
    clean_env.setenv("CLERK_SECRET_KEY", "sk_live")
    clean_env.setenv("REDIS_URL", "redis://localhost:6379/0")
    clean_env.setenv("AGORA_APP_ID", "app")
    clean_env.setenv("AGORA_APP_CERTIFICATE", "cert")
    clean_env.setenv("CALL_TOKEN_TTL_SECONDS", "120")
    clean_env.setenv("DEMO_SESSIONS_ENABLED", "yes")

    s = Settings.from_env()
    assert s.missing_required() == []
    assert s.call_token_ttl_seconds == 120
    assert s.demo_sessions_enabled is True


def test_identity_key_prefers_dedicated_jwt_key(clean_env) -> None:
    clean_env.setenv("CLERK_SECRET_KEY", "sk_live")
    assert Settings.from_env().identity_jwt_key == "sk_live"
    clean_env.setenv("CLERK_JWT_KEY", "-----BEGIN PUBLIC KEY-----")
    assert Settings.from_env().identity_jwt_key == "-----BEGIN PUBLIC KEY-----"
