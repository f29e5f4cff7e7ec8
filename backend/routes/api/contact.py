"""Marketing-site forms: leads, enterprise demo requests, contact messages."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from services import contact_service

from .schemas import ContactBody, EnterpriseDemoBody, LeadBody

router = APIRouter(tags=["contact"])


@router.post("/leads", status_code=201)
async def post_lead(body: LeadBody, session: AsyncSession = Depends(get_db_session)) -> dict:
    return await contact_service.save_lead(
        session, body.name, str(body.email), body.mobile, utm=body.utm, page=body.page
    )


@router.post("/enterprise-demo", status_code=201)
async def post_enterprise_demo(
    body: EnterpriseDemoBody, session: AsyncSession = Depends(get_db_session)
) -> dict:
    return await contact_service.save_enterprise_demo(
        session, body.name, str(body.email), body.company, page=body.page
    )


@router.post("/contact", status_code=201)
async def post_contact(body: ContactBody, session: AsyncSession = Depends(get_db_session)) -> dict:
    return await contact_service.save_contact_message(
        session, body.name, str(body.email), body.subject, body.message, phone=body.phone
    )
