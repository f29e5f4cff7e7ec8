"""Bridge to the external identity provider (Clerk).

Session tokens are JWTs. They are verified locally with PyJWT: RS256 when the
configured key is a PEM public key, HS256 with the shared secret otherwise.
User details for the local mirror are fetched from the provider's REST API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
import jwt

logger = logging.getLogger(__name__)

IDENTITY_TIMEOUT_SECONDS = 10.0


class IdentityError(Exception):
    """Token could not be verified."""


@dataclass(frozen=True)
class AuthContext:
    user_id: str
    session_id: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderUser:
    id: str
    email: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    image_url: Optional[str]

    @property
    def full_name(self) -> Optional[str]:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or None


def _algorithms_for_key(key: str) -> List[str]:
    if key.lstrip().startswith("-----BEGIN"):
        return ["RS256"]
    return ["HS256"]


class IdentityProvider:
    def __init__(
        self,
        jwt_key: str,
        secret_key: str,
        api_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.jwt_key = jwt_key
        self.secret_key = secret_key
        self.api_url = api_url.rstrip("/")
        self._transport = transport

    async def verify_token(self, token: str) -> AuthContext:
        """Verify a bearer token and return its auth context. Raises IdentityError."""
        if not self.jwt_key:
            raise IdentityError("Identity provider key is not configured")
        try:
            claims = jwt.decode(
                token,
                self.jwt_key,
                algorithms=_algorithms_for_key(self.jwt_key),
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as e:
            raise IdentityError(str(e)) from e
        return AuthContext(user_id=str(claims["sub"]), session_id=claims.get("sid"), claims=claims)

    async def fetch_user(self, user_id: str) -> ProviderUser:
        """Fetch user details from the provider REST API.

        Raises httpx.HTTPError on transport or status failures and ValueError
        when the response body is not a user object.
        """
        async with httpx.AsyncClient(
            timeout=IDENTITY_TIMEOUT_SECONDS, transport=self._transport
        ) as client:
            response = await client.get(
                f"{self.api_url}/users/{user_id}",
                headers={"Authorization": f"Bearer {self.secret_key}"},
            )
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected user payload for {user_id}")
        emails = data.get("email_addresses") or []
        if not isinstance(emails, list) or not all(isinstance(e, dict) for e in emails):
            raise ValueError(f"Unexpected email_addresses for {user_id}")
        email = _optional_str(emails[0].get("email_address")) if emails else None
        return ProviderUser(
            id=str(data.get("id") or user_id),
            email=email,
            first_name=_optional_str(data.get("first_name")),
            last_name=_optional_str(data.get("last_name")),
            image_url=_optional_str(data.get("image_url")),
        )


def _optional_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"Expected a string, got {type(value).__name__}")
