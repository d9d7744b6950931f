from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class EmailSendResult:
    status: str
    provider: str
    message_id: str | None = None
    error: str | None = None


class EmailProvider(Protocol):
    name: str

    def send(self, *, to: str, subject: str, html: str) -> EmailSendResult:
        ...


class EmailDeliveryError(Exception):
    """Raised when a provider could not hand the message off."""


def mask_address(address: str) -> str:
    local, _, domain = (address or "").partition("@")
    if not domain:
        return "****"
    return f"{local[:1]}***@{domain}"
