"""Owner-scoped email campaigns addressed to a subscriber segment.

A segment is either ``all`` or one subscriber tag. The recipient count is
taken when the campaign is created; the status follows the schedule.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from briklyst.core.database import commit_or_rollback
from briklyst.core.errors import NotFoundError
from briklyst.models.email_campaign import EmailCampaign
from briklyst.models.email_template import EmailTemplate
from briklyst.models.subscriber import Subscriber
from briklyst.models.user import User
from briklyst.schemas.mailing import CampaignCreate, CampaignReschedule
from briklyst.services.storefronts import ensure_storefront

logger = logging.getLogger(__name__)

SEGMENT_ALL = "all"
STATUS_SENT = "sent"
STATUS_SCHEDULED = "scheduled"


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def campaign_status(scheduled_at: datetime, *, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return STATUS_SENT if _as_utc(scheduled_at) <= now else STATUS_SCHEDULED


def count_recipients(db: Session, user: User, segment: str) -> int:
    storefront = ensure_storefront(db, user)
    tag_lists = db.query(Subscriber.tags).filter(Subscriber.storefront_id == storefront.id).all()
    if segment == SEGMENT_ALL:
        return len(tag_lists)
    # tags live in a JSON column, so membership is checked here rather than in SQL
    return sum(1 for (tags,) in tag_lists if segment in (tags or []))


def _owned_campaign(db: Session, user: User, campaign_id: int) -> EmailCampaign:
    campaign = (
        db.query(EmailCampaign)
        .filter(EmailCampaign.id == campaign_id, EmailCampaign.user_id == user.id)
        .first()
    )
    if campaign is None:
        raise NotFoundError("Campaign not found")
    return campaign


def _check_template(db: Session, user: User, template_id: int | None) -> None:
    if template_id is None:
        return
    owned = (
        db.query(EmailTemplate.id)
        .filter(EmailTemplate.id == template_id, EmailTemplate.user_id == user.id)
        .first()
    )
    if owned is None:
        raise NotFoundError("Template not found")


def list_campaigns(db: Session, user: User) -> list[EmailCampaign]:
    return (
        db.query(EmailCampaign)
        .filter(EmailCampaign.user_id == user.id)
        .order_by(EmailCampaign.created_at.desc(), EmailCampaign.id.desc())
        .all()
    )


def create_campaign(db: Session, user: User, payload: CampaignCreate) -> EmailCampaign:
    _check_template(db, user, payload.template_id)
    segment = payload.segment.strip()
    scheduled_at = _as_utc(payload.scheduled_at)

    campaign = EmailCampaign(
        user_id=user.id,
        template_id=payload.template_id,
        subject=payload.subject,
        html=payload.html,
        segment=segment,
        scheduled_at=scheduled_at,
        status=campaign_status(scheduled_at),
        recipients=count_recipients(db, user, segment),
    )
    db.add(campaign)
    commit_or_rollback(db, "create email campaign")
    db.refresh(campaign)
    logger.info(
        "Email campaign created segment=%s recipients=%s status=%s",
        campaign.segment,
        campaign.recipients,
        campaign.status,
    )
    return campaign


def reschedule_campaign(
    db: Session,
    user: User,
    campaign_id: int,
    payload: CampaignReschedule,
) -> EmailCampaign:
    campaign = _owned_campaign(db, user, campaign_id)
    campaign.scheduled_at = _as_utc(payload.scheduled_at)
    campaign.status = campaign_status(campaign.scheduled_at)
    commit_or_rollback(db, "reschedule email campaign")
    db.refresh(campaign)
    return campaign


def delete_campaign(db: Session, user: User, campaign_id: int) -> None:
    campaign = _owned_campaign(db, user, campaign_id)
    db.delete(campaign)
    commit_or_rollback(db, "delete email campaign")
