from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime, timezone

from briklyst.core.request_context import get_request_id, get_user_id

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
# "json" for deployments, "text" for a readable local console
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

_SECRET_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(authorization\s*[:=]\s*bearer\s+)([^\s\"]+)",
        r"((?:access_)?token\s*[:=]\s*)([^\s\",}]+)",
        r"(password\s*[:=]\s*)([^\s\",}]+)",
        r"(secret\s*[:=]\s*)([^\s\",}]+)",
        r"(x-internal-token\s*[:=]\s*)([^\s\",}]+)",
    )
)

# extras that services and the access log attach with ``extra={...}``
CONTEXT_FIELDS = ("endpoint", "method", "status_code", "duration_ms", "storefront_id")


def mask_secrets(text: str) -> str:
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r"\1***", text)
    return text


def _context(record: logging.LogRecord) -> dict:
    context = {
        "request_id": getattr(record, "request_id", None) or get_request_id(),
        "user_id": getattr(record, "user_id", None) or get_user_id(),
    }
    for field in CONTEXT_FIELDS:
        value = getattr(record, field, None)
        if value is not None:
            context[field] = value
    return context


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": mask_secrets(record.getMessage()),
            **_context(record),
        }
        if record.exc_info:
            payload["exception"] = mask_secrets(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        context = " ".join(f"{key}={value}" for key, value in _context(record).items() if value is not None)
        line = f"{record.levelname:<8} {record.name}: {mask_secrets(record.getMessage())}"
        if context:
            line = f"{line} [{context}]"
        if record.exc_info:
            line = f"{line}\n{mask_secrets(self.formatException(record.exc_info))}"
        return line


def configure_logging() -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(TextFormatter() if LOG_FORMAT == "text" else JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(LOG_LEVEL)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(LOG_LEVEL)
