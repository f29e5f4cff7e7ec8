import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./aureeture.db"

# Settings that must be non-empty before the server is allowed to boot.
REQUIRED_ENV = {
    "database_url": "DATABASE_URL",
    "frontend_url": "FRONTEND_URL",
    "clerk_secret_key": "CLERK_SECRET_KEY",
    "redis_url": "REDIS_URL",
    "agora_app_id": "AGORA_APP_ID",
    "agora_app_certificate": "AGORA_APP_CERTIFICATE",
}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Aureeture API"
    env: str = "dev"
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    frontend_url: str = ""

    clerk_secret_key: str = ""
    clerk_jwt_key: str = ""
    clerk_api_url: str = "https://api.clerk.com/v1"

    # Declared for parity with the deployment environment; nothing reads it yet.
    redis_url: str = ""

    agora_app_id: str = ""
    agora_app_certificate: str = ""
    call_token_ttl_seconds: int = 3600

    email_api_url: str = ""
    email_api_key: str = ""
    email_from: str = "Aureeture <no-reply@aureeture.ai>"

    demo_sessions_enabled: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            frontend_url=os.getenv("FRONTEND_URL", cls.frontend_url),
            clerk_secret_key=os.getenv("CLERK_SECRET_KEY", cls.clerk_secret_key),
            clerk_jwt_key=os.getenv("CLERK_JWT_KEY", cls.clerk_jwt_key),
            clerk_api_url=os.getenv("CLERK_API_URL", cls.clerk_api_url),
            redis_url=os.getenv("REDIS_URL", cls.redis_url),
            agora_app_id=os.getenv("AGORA_APP_ID", cls.agora_app_id),
            agora_app_certificate=os.getenv("AGORA_APP_CERTIFICATE", cls.agora_app_certificate),
            call_token_ttl_seconds=int(os.getenv("CALL_TOKEN_TTL_SECONDS", str(cls.call_token_ttl_seconds))),
            email_api_url=os.getenv("EMAIL_API_URL", cls.email_api_url),
            email_api_key=os.getenv("EMAIL_API_KEY", cls.email_api_key),
            email_from=os.getenv("EMAIL_FROM", cls.email_from),
            demo_sessions_enabled=_env_flag("DEMO_SESSIONS_ENABLED"),
        )

    @property
    def identity_jwt_key(self) -> str:
        """Key used to verify identity-provider session tokens."""
        return self.clerk_jwt_key or self.clerk_secret_key

    def missing_required(self) -> List[str]:
        """Return env var names of required settings that are empty."""
        return [env_name for attr, env_name in REQUIRED_ENV.items() if not getattr(self, attr)]


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
