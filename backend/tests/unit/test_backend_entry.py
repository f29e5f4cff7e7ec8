"""
Unit tests for the process entrypoint's configuration gate.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest

import backend_entry
from core.config import Settings, get_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_missing_required_settings_exit_with_status_1(monkeypatch, caplog, fresh_settings) -> None:
    for name in ("FRONTEND_URL", "CLERK_SECRET_KEY", "REDIS_URL", "AGORA_APP_ID", "AGORA_APP_CERTIFICATE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FRONTEND_URL", "https://app.example.com")
    monkeypatch.setattr(sys, "argv", ["backend_entry.py"])

    with caplog.at_level(logging.ERROR, logger="backend_entry"):
        assert backend_entry.main() == 1

    logged = " ".join(r.getMessage() for r in caplog.records)
    for name in ("CLERK_SECRET_KEY", "REDIS_URL", "AGORA_APP_ID", "AGORA_APP_CERTIFICATE"):
        assert name in logged
    assert "FRONTEND_URL" not in logged


def test_check_required_passes_for_complete_settings() -> None:
    settings = Settings(
        frontend_url="https://app.example.com",
        clerk_secret_key="sk",
        redis_url="redis://localhost:6379/0",
        agora_app_id="app",
        agora_app_certificate="cert",
    )
    assert backend_entry._check_required(settings) is True
