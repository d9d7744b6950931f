from __future__ import annotations

import logging
import uuid

from briklyst.mailer.base import EmailProvider, EmailSendResult, mask_address

logger = logging.getLogger(__name__)


class MockEmailProvider(EmailProvider):
    """Logs messages instead of sending them and keeps them for inspection."""

    name = "mock"

    def __init__(self) -> None:
        self.outbox: list[dict[str, str]] = []

    def send(self, *, to: str, subject: str, html: str) -> EmailSendResult:
        message_id = f"mock-{uuid.uuid4().hex[:10]}"
        self.outbox.append({"to": to, "subject": subject, "html": html, "message_id": message_id})
        logger.info("Mock email queued to=%s subject=%s", mask_address(to), subject)
        return EmailSendResult(status="sent", provider=self.name, message_id=message_id)
