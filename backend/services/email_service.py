"""Transactional email: message templates and a single-attempt HTTP sender."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

EMAIL_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class EmailContent:
    subject: str
    html: str


def _format_when(start: datetime, end: datetime) -> str:
    day = f"{start:%A}, {start.day} {start:%B %Y}"
    return f"{day}, {start:%H:%M} - {end:%H:%M} UTC"


def build_session_confirmation_email(
    recipient_name: str,
    title: str,
    counterpart_name: str,
    start: datetime,
    end: datetime,
    meeting_link: str,
    is_mentor: bool,
) -> EmailContent:
    """Confirmation sent to each side of a newly paid session."""
    if is_mentor:
        subject = f"New session booked: {title}"
        intro = f"{html.escape(counterpart_name)} has booked a session with you."
    else:
        subject = f"Your session is confirmed: {title}"
        intro = f"Your session with {html.escape(counterpart_name)} is confirmed."

    link = html.escape(meeting_link, quote=True)
    body = (
        f"<p>Hi {html.escape(recipient_name)},</p>"
        f"<p>{intro}</p>"
        "<ul>"
        f"<li><strong>Session:</strong> {html.escape(title)}</li>"
        f"<li><strong>When:</strong> {_format_when(start, end)}</li>"
        f"<li><strong>Join:</strong> <a href=\"{link}\">{link}</a></li>"
        "</ul>"
        "<p>You can join from your dashboard 15 minutes before the start time.</p>"
        "<p>The Aureeture team</p>"
    )
    return EmailContent(subject=subject, html=body)


class EmailSender:
    """Posts messages to an HTTP email API.

    Delivery is best-effort: one attempt, failures are logged and reported
    as False, never raised to the request handler.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        sender: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_url)

    async def send(self, to: str, subject: str, html_body: str) -> bool:
        if not self.enabled:
            logger.info("Email delivery disabled; dropping %r to %s", subject, to)
            return False

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        payload = {"from": self.sender, "to": [to], "subject": subject, "html": html_body}
        try:
            async with httpx.AsyncClient(
                timeout=EMAIL_TIMEOUT_SECONDS, transport=self._transport
            ) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Email delivery to %s failed: %s", to, e)
            return False
        logger.info("Email %r sent to %s", subject, to)
        return True
