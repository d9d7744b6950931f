from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from briklyst.core.database import commit_or_rollback
from briklyst.core.errors import NotFoundError, ValidationError
from briklyst.models.storefront import Storefront
from briklyst.models.subscriber import Subscriber
from briklyst.models.user import User
from briklyst.schemas.mailing import SubscriberCreate, SubscriberUpdate
from briklyst.services.storefronts import ensure_storefront, resolve_for_storefront

logger = logging.getLogger(__name__)

ALREADY_SUBSCRIBED = "Email already subscribed"


def _is_subscribed(db: Session, storefront_id: int, email: str) -> bool:
    return (
        db.query(Subscriber.id)
        .filter(Subscriber.storefront_id == storefront_id, func.lower(Subscriber.email) == email.lower())
        .first()
        is not None
    )


def _add_subscriber(db: Session, subscriber: Subscriber) -> Subscriber:
    db.add(subscriber)
    try:
        commit_or_rollback(db, "save subscriber")
    except IntegrityError as exc:
        raise ValidationError(ALREADY_SUBSCRIBED) from exc
    db.refresh(subscriber)
    return subscriber


def subscribe(db: Session, *, storefront_id: int, email: str, name: str = "") -> tuple[Subscriber, str]:
    """Public sign-up. Returns the subscriber and the storefront's success message."""
    storefront = db.query(Storefront).filter(Storefront.id == storefront_id).first()
    if storefront is None:
        raise NotFoundError("Storefront not found")

    block = resolve_for_storefront(db, storefront).subscriber_block
    if not block.enabled:
        raise ValidationError("Subscriptions are closed for this storefront")

    email = email.lower()
    if _is_subscribed(db, storefront.id, email):
        raise ValidationError(ALREADY_SUBSCRIBED)

    subscriber = _add_subscriber(db, Subscriber(storefront_id=storefront.id, email=email, name=name, tags=[]))
    logger.info("New subscriber", extra={"storefront_id": storefront.id})
    return subscriber, block.success_message


def _owned_subscriber(db: Session, user: User, subscriber_id: int) -> Subscriber:
    subscriber = (
        db.query(Subscriber)
        .join(Storefront, Storefront.id == Subscriber.storefront_id)
        .filter(Subscriber.id == subscriber_id, Storefront.user_id == user.id)
        .first()
    )
    if subscriber is None:
        raise NotFoundError("Subscriber not found")
    return subscriber


def list_subscribers(db: Session, user: User) -> list[Subscriber]:
    storefront = ensure_storefront(db, user)
    return (
        db.query(Subscriber)
        .filter(Subscriber.storefront_id == storefront.id)
        .order_by(Subscriber.created_at.desc(), Subscriber.id.desc())
        .all()
    )


def add_subscriber(db: Session, user: User, payload: SubscriberCreate) -> Subscriber:
    storefront = ensure_storefront(db, user)
    email = payload.email.lower()
    if _is_subscribed(db, storefront.id, email):
        raise ValidationError(ALREADY_SUBSCRIBED)
    return _add_subscriber(
        db,
        Subscriber(storefront_id=storefront.id, email=email, name=payload.name, tags=payload.tags),
    )


def update_subscriber(db: Session, user: User, subscriber_id: int, payload: SubscriberUpdate) -> Subscriber:
    subscriber = _owned_subscriber(db, user, subscriber_id)
    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(subscriber, field, value)
    commit_or_rollback(db, "update subscriber")
    db.refresh(subscriber)
    return subscriber


def remove_subscriber(db: Session, user: User, subscriber_id: int) -> None:
    subscriber = _owned_subscriber(db, user, subscriber_id)
    db.delete(subscriber)
    commit_or_rollback(db, "delete subscriber")
