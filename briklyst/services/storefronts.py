"""Storefront lookup, first-access creation and the public view model."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from briklyst.core.errors import AuthenticationError, NotFoundError, ValidationError
from briklyst.models.product import Product
from briklyst.models.storefront import Storefront
from briklyst.models.storefront_settings import StorefrontSettings
from briklyst.models.user import User
from briklyst.schemas.presentation import ResolvedPresentation
from briklyst.schemas.storefront import ProductPublic, StorefrontPublic, StorefrontView
from briklyst.services.settings_resolver import resolve_presentation, settings_snapshot
from briklyst.services.theme_application import css_variables

logger = logging.getLogger(__name__)


def sync_flattened_fields(storefront: Storefront, presentation: ResolvedPresentation) -> None:
    """Copy resolved values onto the storefront's cached columns."""
    storefront.primary_color = presentation.colors.primary
    storefront.accent_color = presentation.colors.accent
    storefront.background_color = presentation.colors.background
    storefront.text_color = presentation.colors.text
    storefront.font_family = presentation.fonts.body
    storefront.theme_id = presentation.theme_id


def build_default_storefront(user: User) -> Storefront:
    """New storefront with its baseline settings row attached, not yet added."""
    storefront = Storefront(
        user_id=user.id,
        title=f"{user.name}'s Storefront",
        description="Welcome to my storefront!",
    )
    storefront.settings = StorefrontSettings(user_id=user.id)
    sync_flattened_fields(storefront, resolve_presentation(None))
    return storefront


def get_storefront_for_user(db: Session, user_id: int) -> Storefront | None:
    return db.query(Storefront).filter(Storefront.user_id == user_id).first()


def ensure_storefront(db: Session, user: User) -> Storefront:
    """Return the user's storefront, creating it and its settings on first access."""
    storefront = get_storefront_for_user(db, user.id)
    if storefront is not None:
        return storefront

    storefront = build_default_storefront(user)
    db.add(storefront)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request created it first
        db.rollback()
        existing = get_storefront_for_user(db, user.id)
        if existing is None:
            raise
        return existing

    db.refresh(storefront)
    logger.info("Created default storefront", extra={"storefront_id": storefront.id})
    return storefront


def get_settings_row(db: Session, user_id: int) -> StorefrontSettings | None:
    return db.query(StorefrontSettings).filter(StorefrontSettings.user_id == user_id).first()


def resolve_for_storefront(db: Session, storefront: Storefront) -> ResolvedPresentation:
    return resolve_presentation(settings_snapshot(get_settings_row(db, storefront.user_id)))


def list_public_products(db: Session, storefront_id: int) -> list[Product]:
    return (
        db.query(Product)
        .filter(Product.storefront_id == storefront_id, Product.deleted_at.is_(None))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )


def build_view(db: Session, storefront: Storefront) -> StorefrontView:
    presentation = resolve_for_storefront(db, storefront)
    return StorefrontView(
        storefront=StorefrontPublic.model_validate(storefront),
        presentation=presentation,
        css_variables=css_variables(presentation),
        products=[ProductPublic.model_validate(product) for product in list_public_products(db, storefront.id)],
    )


def find_storefront(
    db: Session,
    *,
    user_id: int | None = None,
    username: str | None = None,
    current: bool = False,
    session_user: User | None = None,
) -> Storefront:
    if current:
        if session_user is None:
            raise AuthenticationError()
        return ensure_storefront(db, session_user)

    if user_id is not None:
        storefront = get_storefront_for_user(db, user_id)
    elif username:
        storefront = (
            db.query(Storefront)
            .join(User, User.id == Storefront.user_id)
            .filter(User.name == username)
            .first()
        )
    else:
        raise ValidationError("User ID or username is required")

    if storefront is None:
        raise NotFoundError("Storefront not found")
    return storefront


def get_presentation(db: Session, **lookup) -> StorefrontView:
    return build_view(db, find_storefront(db, **lookup))
