from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from services.call_token import CallTokenMinter
from services.email_service import EmailSender
from services.identity import IdentityProvider

from .config import Settings, get_settings
from .database import get_database_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding an AsyncSession from the DatabaseManager."""
    manager = get_database_manager()
    async with manager.session() as session:
        yield session


def get_now() -> datetime:
    """Current UTC time; overridden in tests to pin the clock."""
    return datetime.now(timezone.utc)


def get_app_settings() -> Settings:
    return get_settings()


def get_identity_provider(settings: Settings = Depends(get_app_settings)) -> IdentityProvider:
    return IdentityProvider(
        jwt_key=settings.identity_jwt_key,
        secret_key=settings.clerk_secret_key,
        api_url=settings.clerk_api_url,
    )


def get_email_sender(settings: Settings = Depends(get_app_settings)) -> EmailSender:
    return EmailSender(
        api_url=settings.email_api_url,
        api_key=settings.email_api_key,
        sender=settings.email_from,
    )


def get_call_token_minter(settings: Settings = Depends(get_app_settings)) -> CallTokenMinter:
    return CallTokenMinter(
        app_id=settings.agora_app_id,
        app_certificate=settings.agora_app_certificate,
        ttl_seconds=settings.call_token_ttl_seconds,
    )
