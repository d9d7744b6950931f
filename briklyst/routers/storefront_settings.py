from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from briklyst.core.database import get_db
from briklyst.deps import get_current_user
from briklyst.models.user import User
from briklyst.schemas.storefront import (
    PreviewResponse,
    ProfileUpdate,
    SettingsWithPresentation,
    StorefrontPublic,
    StorefrontSettingsRead,
    ThemeUpdate,
)
from briklyst.schemas.storefront_settings import StorefrontSettingsPayload
from briklyst.services import storefront_settings as settings_service
from briklyst.services.settings_resolver import resolve_presentation, settings_snapshot
from briklyst.services.storefronts import get_settings_row
from briklyst.services.template_catalog import list_templates
from briklyst.services.theme_application import css_variables, preview_presentation, render_style_block
from briklyst.services.theme_catalog import list_themes

router = APIRouter(prefix="/api/storefront", tags=["storefront-settings"])


def _settings_response(row) -> SettingsWithPresentation:
    return SettingsWithPresentation(
        settings=StorefrontSettingsRead.model_validate(row),
        presentation=resolve_presentation(settings_snapshot(row)),
    )


@router.get("/themes")
def get_themes():
    return {"themes": list_themes()}


@router.get("/templates")
def get_templates():
    return {"templates": list_templates()}


@router.get("/settings", response_model=SettingsWithPresentation)
def read_settings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _settings_response(settings_service.get_settings(db, current_user))


@router.put("/settings", response_model=SettingsWithPresentation)
@router.patch("/settings", response_model=SettingsWithPresentation, include_in_schema=False)
def save_settings(
    payload: StorefrontSettingsPayload,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    row = settings_service.upsert_settings(db, current_user, payload.changes())
    return _settings_response(row)


@router.post("/preview", response_model=PreviewResponse)
def preview_settings(
    payload: StorefrontSettingsPayload,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    draft = payload.changes()
    settings_service.validate_catalog_ids(draft)
    stored = settings_snapshot(get_settings_row(db, current_user.id))
    presentation = preview_presentation(stored, draft)
    return PreviewResponse(
        presentation=presentation,
        css_variables=css_variables(presentation),
        style=render_style_block(presentation),
    )


@router.patch("/theme", response_model=StorefrontPublic)
def change_theme(
    payload: ThemeUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return settings_service.apply_theme(db, current_user, payload.theme_id)


@router.patch("/profile", response_model=StorefrontPublic)
def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return settings_service.update_profile(db, current_user, payload)
