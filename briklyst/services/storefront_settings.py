"""The single write path for anything that changes how a storefront looks.

Every write here re-resolves the presentation and rewrites the storefront's
flattened columns in the same transaction as the triggering change.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from briklyst.core.database import commit_or_rollback
from briklyst.core.errors import NotFoundError, UpstreamError, ValidationError
from briklyst.models.storefront import Storefront
from briklyst.models.storefront_settings import StorefrontSettings
from briklyst.models.user import User
from briklyst.schemas.storefront import ProfileUpdate, StorefrontUpdate
from briklyst.services.settings_resolver import apply_settings_changes, resolve_presentation, settings_snapshot
from briklyst.services.storefronts import ensure_storefront, get_storefront_for_user, sync_flattened_fields
from briklyst.services.template_catalog import find_template_by_id
from briklyst.services.theme_catalog import get_theme

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}

# legacy flattened inputs map onto override leaves
_FLAT_FIELD_OVERRIDES = {
    "primary_color": ("colors", "primary"),
    "accent_color": ("colors", "accent"),
    "background_color": ("colors", "background"),
    "text_color": ("colors", "text"),
    "font_family": ("fonts", "body"),
}

_STOREFRONT_COLUMNS = ("title", "description", "domain", "logo_url", "banner_url")


def validate_catalog_ids(changes: dict[str, Any]) -> None:
    template_id = changes.get("template_id")
    if template_id is not None and find_template_by_id(template_id) is None:
        raise ValidationError("Invalid template ID")
    theme_id = changes.get("theme_id")
    if theme_id is not None and get_theme(theme_id) is None:
        raise ValidationError("Invalid theme ID")


def _lock_settings_row(db: Session, storefront: Storefront) -> StorefrontSettings:
    """Create the row if it is missing, then lock it for the rest of the transaction."""
    insert_factory = _DIALECT_INSERTS.get(db.get_bind().dialect.name)
    if insert_factory is not None:
        statement = (
            insert_factory(StorefrontSettings)
            .values(user_id=storefront.user_id, storefront_id=storefront.id)
            .on_conflict_do_nothing(index_elements=["user_id"])
        )
        db.execute(statement)
    elif db.query(StorefrontSettings.id).filter(StorefrontSettings.user_id == storefront.user_id).first() is None:
        db.add(StorefrontSettings(user_id=storefront.user_id, storefront_id=storefront.id))
        db.flush()

    return (
        db.query(StorefrontSettings)
        .filter(StorefrontSettings.user_id == storefront.user_id)
        .populate_existing()
        .with_for_update()
        .one()
    )


def upsert_settings(
    db: Session,
    user: User,
    changes: dict[str, Any],
    *,
    storefront_changes: dict[str, Any] | None = None,
    replace_overrides: bool = False,
) -> StorefrontSettings:
    """Create or merge-update the user's settings.

    Top-level fields present in ``changes`` replace the stored value, except
    ``template_overrides`` which is merged leaf by leaf into the stored tree
    unless ``replace_overrides`` is set.
    """
    validate_catalog_ids(changes)
    storefront = ensure_storefront(db, user)
    row = _lock_settings_row(db, storefront)

    applied = apply_settings_changes(settings_snapshot(row), changes, replace_overrides=replace_overrides)
    for field, value in applied.items():
        setattr(row, field, value)

    for field, value in (storefront_changes or {}).items():
        setattr(storefront, field, value)

    sync_flattened_fields(storefront, resolve_presentation(settings_snapshot(row)))
    try:
        commit_or_rollback(db, "save storefront settings")
    except IntegrityError as exc:
        if "domain" in (storefront_changes or {}):
            raise ValidationError("Domain already in use") from exc
        raise UpstreamError() from exc
    db.refresh(row)
    logger.info(
        "Storefront settings saved fields=%s",
        sorted(changes),
        extra={"storefront_id": storefront.id},
    )
    return row


def get_settings(db: Session, user: User) -> StorefrontSettings:
    storefront = ensure_storefront(db, user)
    if storefront.settings is None:
        return upsert_settings(db, user, {})
    return storefront.settings


def apply_theme(db: Session, user: User, theme_id: str | None) -> Storefront:
    if not theme_id:
        raise ValidationError("Theme ID is required")
    if get_theme(theme_id) is None:
        raise ValidationError("Invalid theme ID")
    storefront = get_storefront_for_user(db, user.id)
    if storefront is None:
        raise NotFoundError("Storefront not found")

    upsert_settings(db, user, {"theme_id": theme_id})
    db.refresh(storefront)
    return storefront


def update_storefront(db: Session, user: User, payload: StorefrontUpdate) -> Storefront:
    data = payload.model_dump(exclude_unset=True)
    changes: dict[str, Any] = {}
    overrides: dict[str, dict[str, Any]] = {}

    for field in ("template_id", "theme_id"):
        if field in data:
            changes[field] = data[field]
    for field, (group, leaf) in _FLAT_FIELD_OVERRIDES.items():
        if field in data:
            overrides.setdefault(group, {})[leaf] = data[field]
    if overrides:
        changes["template_overrides"] = overrides

    storefront_changes = {field: data[field] for field in _STOREFRONT_COLUMNS if field in data}
    if storefront_changes.get("title") is None:
        storefront_changes.pop("title", None)

    upsert_settings(db, user, changes, storefront_changes=storefront_changes)
    storefront = get_storefront_for_user(db, user.id)
    db.refresh(storefront)
    return storefront


def update_profile(db: Session, user: User, payload: ProfileUpdate) -> Storefront:
    storefront = ensure_storefront(db, user)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(storefront, field, value)
    commit_or_rollback(db, "update storefront profile")
    db.refresh(storefront)
    return storefront
