from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session

from briklyst.core.database import get_db
from briklyst.services.storefronts import build_view, find_storefront
from briklyst.services.theme_application import render_storefront_page, render_style_block

router = APIRouter(prefix="/storefronts", tags=["public-storefront"])


@router.get("/{username}", response_class=HTMLResponse)
def storefront_page(username: str, db: Session = Depends(get_db)):
    view = build_view(db, find_storefront(db, username=username))
    return HTMLResponse(render_storefront_page(view.model_dump(), view.presentation))


@router.get("/{username}/theme.css")
def storefront_theme_css(username: str, db: Session = Depends(get_db)):
    view = build_view(db, find_storefront(db, username=username))
    return Response(
        content=render_style_block(view.presentation),
        media_type="text/css",
        headers={"Cache-Control": "public, max-age=60"},
    )
