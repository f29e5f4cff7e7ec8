"""Write-only contact form submissions."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from models.contact import ContactMessage, EnterpriseDemo, Lead
from repositories.base import BaseRepository
from services.errors import InvalidRequestError

logger = logging.getLogger(__name__)


async def save_lead(
    session: AsyncSession,
    name: Optional[str],
    email: Optional[str],
    mobile: Optional[str],
    utm: Optional[Dict[str, Any]] = None,
    page: Optional[str] = None,
) -> Dict[str, str]:
    if not name or not email or not mobile:
        raise InvalidRequestError("Name, email, and mobile are required.")
    await BaseRepository(session).add(
        Lead(name=name, email=email, mobile=mobile, utm=utm, page=page, source="website-modal")
    )
    logger.info("Lead saved from page %s", page)
    return {"message": "Lead saved successfully!"}


async def save_enterprise_demo(
    session: AsyncSession,
    name: Optional[str],
    email: Optional[str],
    company: Optional[str],
    page: Optional[str] = None,
) -> Dict[str, str]:
    if not name or not email or not company:
        raise InvalidRequestError("Name, email, and company are required.")
    await BaseRepository(session).add(EnterpriseDemo(name=name, email=email, company=company, page=page))
    return {"message": "Demo request saved successfully!"}


async def save_contact_message(
    session: AsyncSession,
    name: Optional[str],
    email: Optional[str],
    subject: Optional[str],
    message: Optional[str],
    phone: Optional[str] = None,
) -> Dict[str, str]:
    if not name or not email or not subject or not message:
        raise InvalidRequestError("Name, email, subject, and message are required.")
    await BaseRepository(session).add(
        ContactMessage(name=name, email=email, phone=phone, subject=subject, message=message)
    )
    return {"message": "Message saved successfully!"}
