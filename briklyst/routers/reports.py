from __future__ import annotations

import hmac
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Header
from sqlalchemy.orm import Session

from briklyst.core.config import CRON_SECRET, WEEKLY_REPORT_MAX_CONCURRENCY
from briklyst.core.database import get_db, get_session_factory
from briklyst.core.errors import AuthenticationError
from briklyst.mailer.service import EmailService, get_email_service
from briklyst.services.weekly_report import send_weekly_reports

router = APIRouter(prefix="/api/reports", tags=["reports"])


def require_cron_secret(authorization: Optional[str] = Header(default=None)) -> None:
    if not CRON_SECRET:
        return
    expected = f"Bearer {CRON_SECRET}"
    if not authorization or not hmac.compare_digest(authorization, expected):
        raise AuthenticationError()


@router.post("/weekly", dependencies=[Depends(require_cron_secret)])
def run_weekly_report(
    db: Session = Depends(get_db),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    email: EmailService = Depends(get_email_service),
):
    summary = send_weekly_reports(db, session_factory, email, max_workers=WEEKLY_REPORT_MAX_CONCURRENCY)
    return summary.as_dict()
