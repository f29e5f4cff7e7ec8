"""
Unit tests for video-call credential minting.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import jwt
import pytest

from services.call_token import CallTokenError, CallTokenMinter

CERT = "unit-test-certificate-with-enough-length-for-hs256"


def test_minted_token_carries_channel_role_and_expiry() -> None:
    minter = CallTokenMinter("app-1", CERT, ttl_seconds=600)
    issued = int(time.time())
    token = minter.mint("session-abc", "user_1", "mentor", now=issued)

    claims = minter.decode(token)
    assert claims["iss"] == "app-1"
    assert claims["sub"] == "user_1"
    assert claims["channel"] == "session-abc"
    assert claims["role"] == "mentor"
    assert claims["exp"] - claims["iat"] == 600


def test_explicit_expiry_overrides_default_ttl() -> None:
    minter = CallTokenMinter("app-1", CERT, ttl_seconds=600)
    claims = minter.decode(minter.mint("c", "u", "mentee", expire_in_seconds=60))
    assert claims["exp"] - claims["iat"] == 60


def test_missing_credentials_raise() -> None:
    with pytest.raises(CallTokenError):
        CallTokenMinter("", CERT).mint("c", "u", "mentor")
    with pytest.raises(CallTokenError):
        CallTokenMinter("app-1", "").mint("c", "u", "mentor")


def test_missing_channel_or_uid_raise() -> None:
    minter = CallTokenMinter("app-1", CERT)
    with pytest.raises(CallTokenError):
        minter.mint("", "u", "mentor")
    with pytest.raises(CallTokenError):
        minter.mint("c", "", "mentor")


def test_token_from_another_app_is_rejected() -> None:
    token = CallTokenMinter("app-1", CERT).mint("c", "u", "mentor")
    with pytest.raises(jwt.InvalidIssuerError):
        CallTokenMinter("app-2", CERT).decode(token)


def test_expired_token_is_rejected() -> None:
    minter = CallTokenMinter("app-1", CERT)
    token = minter.mint("c", "u", "mentor", expire_in_seconds=10, now=time.time() - 3600)
    with pytest.raises(jwt.ExpiredSignatureError):
        minter.decode(token)
