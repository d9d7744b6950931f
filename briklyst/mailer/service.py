from __future__ import annotations

import logging

from briklyst.core.config import IS_PROD, SMTP_HOST
from briklyst.mailer.base import EmailDeliveryError, EmailProvider, EmailSendResult, mask_address
from briklyst.mailer.mock_provider import MockEmailProvider
from briklyst.mailer.smtp_provider import SmtpEmailProvider

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, provider: EmailProvider | None = None) -> None:
        self._provider = provider or self._select_provider()

    @staticmethod
    def _select_provider() -> EmailProvider:
        if SMTP_HOST:
            return SmtpEmailProvider()
        if IS_PROD:
            logger.warning("SMTP_HOST not set in production, emails will only be logged")
        return MockEmailProvider()

    @property
    def provider(self) -> EmailProvider:
        return self._provider

    def send_email(self, *, to: str, subject: str, html: str) -> EmailSendResult:
        result = self._provider.send(to=to, subject=subject, html=html)
        if result.status != "sent":
            logger.error(
                "Email delivery failed provider=%s to=%s",
                result.provider,
                mask_address(to),
            )
            raise EmailDeliveryError(result.error or "Email delivery failed")
        logger.info("Email sent provider=%s to=%s", result.provider, mask_address(to))
        return result


email_service = EmailService()


def get_email_service() -> EmailService:
    return email_service
