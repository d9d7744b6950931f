"""User-saved snapshots of storefront settings."""
from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.orm import Session

from briklyst.core.database import commit_or_rollback
from briklyst.core.errors import NotFoundError
from briklyst.models.saved_template import SavedTemplate
from briklyst.models.storefront_settings import StorefrontSettings
from briklyst.models.user import User
from briklyst.schemas.saved_template import SavedTemplateCreate, SavedTemplateUpdate
from briklyst.schemas.storefront_settings import StorefrontSettingsPayload
from briklyst.services.settings_resolver import settings_snapshot
from briklyst.services.storefront_settings import get_settings, upsert_settings


def _visible_template(db: Session, user: User, template_id: int) -> SavedTemplate:
    template = (
        db.query(SavedTemplate)
        .filter(
            SavedTemplate.id == template_id,
            or_(SavedTemplate.user_id == user.id, SavedTemplate.is_public.is_(True)),
        )
        .first()
    )
    if template is None:
        raise NotFoundError("Template not found")
    return template


def _owned_template(db: Session, user: User, template_id: int) -> SavedTemplate:
    template = (
        db.query(SavedTemplate)
        .filter(SavedTemplate.id == template_id, SavedTemplate.user_id == user.id)
        .first()
    )
    if template is None:
        raise NotFoundError("Template not found")
    return template


def _current_settings(db: Session, user: User) -> dict:
    row: StorefrontSettings = get_settings(db, user)
    return {field: value for field, value in settings_snapshot(row).items() if value is not None}


def list_saved_templates(db: Session, user: User) -> list[SavedTemplate]:
    return (
        db.query(SavedTemplate)
        .filter(or_(SavedTemplate.user_id == user.id, SavedTemplate.is_public.is_(True)))
        .order_by(SavedTemplate.created_at.desc(), SavedTemplate.id.desc())
        .all()
    )


def create_saved_template(db: Session, user: User, payload: SavedTemplateCreate) -> SavedTemplate:
    settings = payload.settings.changes() if payload.settings is not None else _current_settings(db, user)
    template = SavedTemplate(
        user_id=user.id,
        name=payload.name.strip(),
        description=payload.description,
        settings=settings,
        is_public=payload.is_public,
    )
    db.add(template)
    commit_or_rollback(db, "save template")
    db.refresh(template)
    return template


def update_saved_template(db: Session, user: User, template_id: int, payload: SavedTemplateUpdate) -> SavedTemplate:
    template = _owned_template(db, user, template_id)
    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(template, field, value)
    commit_or_rollback(db, "update saved template")
    db.refresh(template)
    return template


def delete_saved_template(db: Session, user: User, template_id: int) -> None:
    template = _owned_template(db, user, template_id)
    db.delete(template)
    commit_or_rollback(db, "delete saved template")


def apply_saved_template(db: Session, user: User, template_id: int) -> StorefrontSettings:
    template = _visible_template(db, user, template_id)
    # re-validate: the catalog or the schema may have changed since it was saved
    payload = StorefrontSettingsPayload.model_validate(template.settings or {})
    return upsert_settings(db, user, payload.changes(), replace_overrides=True)
