"""Weekly click report batch.

Sends run on a bounded thread pool. Each user is handled on its own session
so one failed render or send never affects the rest of the batch.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from briklyst.core.config import APP_URL, WEEKLY_REPORT_MAX_CONCURRENCY
from briklyst.mailer.service import EmailService
from briklyst.mailer.templates import render_template
from briklyst.models.storefront import Storefront
from briklyst.models.user import User
from briklyst.services.analytics import recent_clicks
from briklyst.services.storefronts import list_public_products, resolve_for_storefront
from briklyst.services.theme_application import email_tokens

logger = logging.getLogger(__name__)
REPORT_PREFIX = "[WEEKLY_REPORT]"

SENT = "sent"
SKIPPED = "skipped"


@dataclass
class WeeklyReportSummary:
    sent: int = 0
    failed: int = 0
    skipped: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"sent": self.sent, "failed": self.failed, "skipped": self.skipped}


def build_report(db: Session, storefront: Storefront) -> tuple[str, str]:
    products = list_public_products(db, storefront.id)
    weekly_by_product: dict[int, int] = {}
    for product_id, _ in recent_clicks(db, storefront.id):
        weekly_by_product[product_id] = weekly_by_product.get(product_id, 0) + 1

    rows = "".join(
        render_template("weekly_report_row", product_title=product.title, clicks=product.clicks)[1]
        for product in products
    )
    tokens = email_tokens(resolve_for_storefront(db, storefront))
    return render_template(
        "weekly_report",
        primary_color=tokens["primary_color"],
        storefront_title=storefront.title,
        weekly_clicks=sum(weekly_by_product.values()),
        total_clicks=sum(product.clicks for product in products),
        product_rows=rows,
        dashboard_url=f"{APP_URL}/dashboard",
    )


def _send_for_user(
    session_factory: Callable[[], Session],
    user_id: int,
    email: EmailService,
) -> str:
    db = session_factory()
    try:
        user = db.query(User).filter(User.id == user_id).first()
        storefront = db.query(Storefront).filter(Storefront.user_id == user_id).first()
        if user is None or storefront is None:
            return SKIPPED
        subject, html = build_report(db, storefront)
        to = user.email
    finally:
        db.close()

    email.send_email(to=to, subject=subject, html=html)
    return SENT


def send_weekly_reports(
    db: Session,
    session_factory: Callable[[], Session],
    email: EmailService,
    *,
    max_workers: int = WEEKLY_REPORT_MAX_CONCURRENCY,
) -> WeeklyReportSummary:
    user_ids = [row.id for row in db.query(User.id).filter(User.weekly_report.is_(True)).order_by(User.id).all()]
    summary = WeeklyReportSummary()
    logger.info("%s starting users=%s workers=%s", REPORT_PREFIX, len(user_ids), max_workers)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        futures = {
            pool.submit(_send_for_user, session_factory, user_id, email): user_id
            for user_id in user_ids
        }
        for future in as_completed(futures):
            user_id = futures[future]
            try:
                outcome = future.result()
            except Exception:
                summary.failed += 1
                logger.exception("%s failed user_id=%s", REPORT_PREFIX, user_id)
                continue
            if outcome == SENT:
                summary.sent += 1
            else:
                summary.skipped += 1

    logger.info(
        "%s finished sent=%s failed=%s skipped=%s",
        REPORT_PREFIX,
        summary.sent,
        summary.failed,
        summary.skipped,
    )
    return summary
