from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from briklyst.core.database import get_db
from briklyst.core.errors import UpstreamError
from briklyst.deps import get_current_user
from briklyst.mailer.base import EmailDeliveryError
from briklyst.mailer.service import EmailService, get_email_service
from briklyst.models.user import User
from briklyst.schemas.mailing import (
    CampaignCreate,
    CampaignRead,
    CampaignReschedule,
    EmailTemplateCreate,
    EmailTemplateRead,
    EmailTemplateUpdate,
    SendTestPayload,
    SubscribePayload,
    SubscribeResponse,
    SubscriberCreate,
    SubscriberRead,
    SubscriberUpdate,
)
from briklyst.services import email_campaigns as campaign_service
from briklyst.services import email_templates as template_service
from briklyst.services import subscribers as subscriber_service

router = APIRouter(prefix="/api", tags=["mailing"])
logger = logging.getLogger(__name__)


@router.post("/subscribe", response_model=SubscribeResponse, status_code=201)
def subscribe(payload: SubscribePayload, db: Session = Depends(get_db)):
    _, message = subscriber_service.subscribe(
        db,
        storefront_id=payload.storefront_id,
        email=payload.email,
        name=payload.name,
    )
    return SubscribeResponse(message=message)


@router.get("/email/subscribers", response_model=list[SubscriberRead])
def list_subscribers(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return subscriber_service.list_subscribers(db, current_user)


@router.post("/email/subscribers", response_model=SubscriberRead, status_code=201)
def add_subscriber(
    payload: SubscriberCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return subscriber_service.add_subscriber(db, current_user, payload)


@router.put("/email/subscribers/{subscriber_id}", response_model=SubscriberRead)
def update_subscriber(
    subscriber_id: int,
    payload: SubscriberUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return subscriber_service.update_subscriber(db, current_user, subscriber_id, payload)


@router.delete("/email/subscribers/{subscriber_id}", status_code=204)
def remove_subscriber(
    subscriber_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    subscriber_service.remove_subscriber(db, current_user, subscriber_id)
    return Response(status_code=204)


@router.get("/email/templates", response_model=list[EmailTemplateRead])
def list_email_templates(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return template_service.list_templates(db, current_user)


@router.post("/email/templates", response_model=EmailTemplateRead, status_code=201)
def create_email_template(
    payload: EmailTemplateCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return template_service.create_template(db, current_user, payload)


@router.put("/email/templates/{template_id}", response_model=EmailTemplateRead)
def update_email_template(
    template_id: int,
    payload: EmailTemplateUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return template_service.update_template(db, current_user, template_id, payload)


@router.delete("/email/templates/{template_id}", status_code=204)
def delete_email_template(
    template_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    template_service.delete_template(db, current_user, template_id)
    return Response(status_code=204)


@router.get("/email/campaigns", response_model=list[CampaignRead])
def list_campaigns(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return campaign_service.list_campaigns(db, current_user)


@router.post("/email/campaigns", response_model=CampaignRead, status_code=201)
def create_campaign(
    payload: CampaignCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return campaign_service.create_campaign(db, current_user, payload)


@router.put("/email/campaigns/{campaign_id}", response_model=CampaignRead)
def reschedule_campaign(
    campaign_id: int,
    payload: CampaignReschedule,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return campaign_service.reschedule_campaign(db, current_user, campaign_id, payload)


@router.delete("/email/campaigns/{campaign_id}", status_code=204)
def delete_campaign(
    campaign_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    campaign_service.delete_campaign(db, current_user, campaign_id)
    return Response(status_code=204)


@router.post("/email/send-test")
def send_test_email(
    payload: SendTestPayload,
    current_user: User = Depends(get_current_user),
    email: EmailService = Depends(get_email_service),
):
    try:
        result = email.send_email(to=payload.to, subject=payload.subject, html=payload.html)
    except EmailDeliveryError as exc:
        raise UpstreamError("Failed to send test email") from exc
    logger.info("Test email sent by user_id=%s", current_user.id)
    return {"status": result.status, "message_id": result.message_id}
