"""Signed, time-limited credentials for joining a video-call channel."""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import jwt

CALL_TOKEN_ALGORITHM = "HS256"


class CallTokenError(RuntimeError):
    """Raised when a token cannot be minted (usually missing app credentials)."""


class CallTokenMinter:
    """Mints per-participant tokens scoped to one channel and role."""

    def __init__(self, app_id: str, app_certificate: str, ttl_seconds: int = 3600) -> None:
        self.app_id = app_id
        self.app_certificate = app_certificate
        self.ttl_seconds = ttl_seconds

    def mint(
        self,
        channel_name: str,
        uid: str,
        role: str,
        expire_in_seconds: Optional[int] = None,
        now: Optional[float] = None,
    ) -> str:
        if not self.app_id or not self.app_certificate:
            raise CallTokenError(
                "Video call credentials are not configured. "
                "Set AGORA_APP_ID and AGORA_APP_CERTIFICATE."
            )
        if not channel_name or not uid or not role:
            raise CallTokenError("channel_name, uid and role are required to mint a call token")

        issued_at = int(now if now is not None else time.time())
        ttl = expire_in_seconds if expire_in_seconds is not None else self.ttl_seconds
        claims = {
            "iss": self.app_id,
            "sub": uid,
            "channel": channel_name,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + ttl,
        }
        return jwt.encode(claims, self.app_certificate, algorithm=CALL_TOKEN_ALGORITHM)

    def decode(self, token: str) -> Dict[str, Any]:
        """Verify signature, issuer and expiry; return the claims."""
        return jwt.decode(
            token,
            self.app_certificate,
            algorithms=[CALL_TOKEN_ALGORITHM],
            issuer=self.app_id,
        )
