from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from briklyst.core.config import EMAIL_FROM, SMTP_HOST, SMTP_PASSWORD, SMTP_PORT, SMTP_USE_TLS, SMTP_USER
from briklyst.mailer.base import EmailProvider, EmailSendResult, mask_address

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 15


class SmtpEmailProvider(EmailProvider):
    name = "smtp"

    def __init__(
        self,
        *,
        host: str = SMTP_HOST,
        port: int = SMTP_PORT,
        user: str = SMTP_USER,
        password: str = SMTP_PASSWORD,
        use_tls: bool = SMTP_USE_TLS,
        sender: str = EMAIL_FROM,
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._use_tls = use_tls
        self._sender = sender

    @property
    def configured(self) -> bool:
        return bool(self._host)

    def send(self, *, to: str, subject: str, html: str) -> EmailSendResult:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain="briklyst.com")
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(html, subtype="html")

        try:
            with smtplib.SMTP(self._host, self._port, timeout=SMTP_TIMEOUT_SECONDS) as smtp:
                if self._use_tls:
                    smtp.starttls()
                if self._user:
                    smtp.login(self._user, self._password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("SMTP send failed to=%s error=%s", mask_address(to), exc.__class__.__name__)
            return EmailSendResult(status="failed", provider=self.name, error=str(exc))

        return EmailSendResult(status="sent", provider=self.name, message_id=message["Message-ID"])
