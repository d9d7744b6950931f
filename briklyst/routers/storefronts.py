from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from briklyst.core.database import get_db
from briklyst.deps import get_current_user, get_optional_user
from briklyst.models.user import User
from briklyst.schemas.storefront import StorefrontUpdate, StorefrontView
from briklyst.services.storefront_settings import update_storefront
from briklyst.services.storefronts import build_view, get_presentation

router = APIRouter(prefix="/api/storefronts", tags=["storefronts"])


@router.get("", response_model=StorefrontView)
def read_storefront(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    username: Optional[str] = Query(default=None),
    current: Optional[str] = Query(default=None),
    session_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    # "?current" (any value) asks for the session user's own storefront
    return get_presentation(
        db,
        user_id=user_id,
        username=username,
        current=current is not None,
        session_user=session_user,
    )


@router.put("", response_model=StorefrontView)
def replace_storefront_fields(
    payload: StorefrontUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    storefront = update_storefront(db, current_user, payload)
    return build_view(db, storefront)
