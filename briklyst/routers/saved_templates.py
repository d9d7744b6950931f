from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from briklyst.core.database import get_db
from briklyst.deps import get_current_user
from briklyst.models.saved_template import SavedTemplate
from briklyst.models.user import User
from briklyst.schemas.saved_template import SavedTemplateCreate, SavedTemplateRead, SavedTemplateUpdate
from briklyst.schemas.storefront import StorefrontSettingsRead
from briklyst.services import saved_templates as saved_template_service

router = APIRouter(prefix="/api/storefront/saved-templates", tags=["saved-templates"])


def _to_read(template: SavedTemplate, user: User) -> SavedTemplateRead:
    return SavedTemplateRead.model_validate(template).model_copy(update={"owned": template.user_id == user.id})


@router.get("", response_model=list[SavedTemplateRead])
def list_saved_templates(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [_to_read(item, current_user) for item in saved_template_service.list_saved_templates(db, current_user)]


@router.post("", response_model=SavedTemplateRead, status_code=201)
def create_saved_template(
    payload: SavedTemplateCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _to_read(saved_template_service.create_saved_template(db, current_user, payload), current_user)


@router.patch("/{template_id}", response_model=SavedTemplateRead)
def update_saved_template(
    template_id: int,
    payload: SavedTemplateUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    template = saved_template_service.update_saved_template(db, current_user, template_id, payload)
    return _to_read(template, current_user)


@router.delete("/{template_id}", status_code=204)
def delete_saved_template(
    template_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    saved_template_service.delete_saved_template(db, current_user, template_id)
    return Response(status_code=204)


@router.post("/{template_id}/apply", response_model=StorefrontSettingsRead)
def apply_saved_template(
    template_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return saved_template_service.apply_saved_template(db, current_user, template_id)
