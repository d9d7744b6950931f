from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from briklyst.core.database import get_db
from briklyst.core.errors import ValidationError
from briklyst.deps import get_current_user, get_optional_user
from briklyst.mailer.service import EmailService, get_email_service
from briklyst.models.user import User
from briklyst.schemas.product import (
    AnalyticsResponse,
    BulkImportPayload,
    BulkImportResult,
    ClickResponse,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from briklyst.services import products as product_service
from briklyst.services.analytics import get_analytics
from briklyst.services.storefronts import ensure_storefront

router = APIRouter(prefix="/api", tags=["products"])


@router.get("/products", response_model=list[ProductRead])
def list_products(
    storefront_id: Optional[int] = Query(default=None, alias="storefrontId"),
    session_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    if storefront_id is None:
        if session_user is None:
            raise ValidationError("Storefront ID is required")
        storefront_id = ensure_storefront(db, session_user).id
    return product_service.list_products(db, storefront_id)


@router.post("/products", response_model=ProductRead, status_code=201)
def create_product(
    payload: ProductCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return product_service.create_product(db, current_user, payload)


@router.post("/products/bulk", response_model=BulkImportResult)
def bulk_import_products(
    payload: BulkImportPayload,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return product_service.bulk_import(db, current_user, payload.products)


@router.put("/products/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return product_service.update_product(db, current_user, product_id, payload)


@router.delete("/products/{product_id}", status_code=204)
def delete_product(
    product_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    product_service.delete_product(db, current_user, product_id)
    return Response(status_code=204)


@router.post("/products/{product_id}/click", response_model=ClickResponse)
def click_product(
    product_id: int,
    visitor: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
    email: EmailService = Depends(get_email_service),
):
    product = product_service.record_click(db, product_id, visitor, email)
    return ClickResponse(product_id=product.id, clicks=product.clicks, affiliate_url=product.affiliate_url)


@router.get("/analytics", response_model=AnalyticsResponse)
def analytics(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_analytics(db, current_user)
