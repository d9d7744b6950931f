from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from briklyst.core.config import APP_URL
from briklyst.core.database import commit_or_rollback
from briklyst.core.errors import NotFoundError
from briklyst.mailer.base import EmailDeliveryError
from briklyst.mailer.service import EmailService
from briklyst.mailer.templates import render_template
from briklyst.models.click_event import ClickEvent
from briklyst.models.product import Product
from briklyst.models.storefront import Storefront
from briklyst.models.user import User
from briklyst.schemas.product import BulkImportError, BulkImportResult, ProductCreate, ProductUpdate
from briklyst.services.storefronts import ensure_storefront, resolve_for_storefront
from briklyst.services.theme_application import email_tokens

logger = logging.getLogger(__name__)
BULK_PREFIX = "[BULK_IMPORT]"


def get_owned_product(db: Session, user: User, product_id: int) -> Product:
    product = (
        db.query(Product)
        .join(Storefront, Storefront.id == Product.storefront_id)
        .filter(
            Product.id == product_id,
            Product.deleted_at.is_(None),
            Storefront.user_id == user.id,
        )
        .first()
    )
    if product is None:
        raise NotFoundError("Product not found")
    return product


def list_products(db: Session, storefront_id: int) -> list[Product]:
    return (
        db.query(Product)
        .filter(Product.storefront_id == storefront_id, Product.deleted_at.is_(None))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )


def create_product(db: Session, user: User, payload: ProductCreate) -> Product:
    storefront = ensure_storefront(db, user)
    product = Product(storefront_id=storefront.id, **payload.model_dump())
    db.add(product)
    commit_or_rollback(db, "create product")
    db.refresh(product)
    return product


def update_product(db: Session, user: User, product_id: int, payload: ProductUpdate) -> Product:
    product = get_owned_product(db, user, product_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in ("title", "affiliate_url", "price"):
            continue
        setattr(product, field, value)
    commit_or_rollback(db, "update product")
    db.refresh(product)
    return product


def delete_product(db: Session, user: User, product_id: int) -> None:
    product = get_owned_product(db, user, product_id)
    product.deleted_at = datetime.now(timezone.utc)
    commit_or_rollback(db, "delete product")


def _describe_row_error(exc: PydanticValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or "row"
    return f"Invalid or missing field: {field}"


def bulk_import(db: Session, user: User, rows: list[dict[str, Any]]) -> BulkImportResult:
    """Insert each row in its own savepoint; bad rows are reported, not fatal."""
    storefront = ensure_storefront(db, user)
    errors: list[BulkImportError] = []
    count = 0

    for index, raw in enumerate(rows):
        try:
            payload = ProductCreate.model_validate(raw)
        except PydanticValidationError as exc:
            errors.append(BulkImportError(index=index, error=_describe_row_error(exc)))
            continue

        try:
            with db.begin_nested():
                db.add(Product(storefront_id=storefront.id, **payload.model_dump()))
        except SQLAlchemyError:
            logger.warning("%s row failed index=%s", BULK_PREFIX, index, exc_info=True)
            errors.append(BulkImportError(index=index, error="Could not save product"))
            continue
        count += 1

    commit_or_rollback(db, "bulk import products")
    logger.info(
        "%s finished imported=%s failed=%s",
        BULK_PREFIX,
        count,
        len(errors),
        extra={"storefront_id": storefront.id},
    )
    return BulkImportResult(count=count, failed=len(errors), errors=errors)


def _send_click_alert(db: Session, product: Product, email: EmailService) -> None:
    storefront = product.storefront
    owner = storefront.user
    if owner is None or not owner.click_alerts:
        return

    tokens = email_tokens(resolve_for_storefront(db, storefront))
    subject, html = render_template(
        "click_alert",
        primary_color=tokens["primary_color"],
        product_title=product.title,
        clicked_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        dashboard_url=f"{APP_URL}/dashboard/analytics",
    )
    try:
        email.send_email(to=owner.email, subject=subject, html=html)
    except EmailDeliveryError:
        logger.warning("Click alert not delivered product_id=%s", product.id)


def record_click(db: Session, product_id: int, visitor: User | None, email: EmailService) -> Product:
    product = (
        db.query(Product)
        .filter(Product.id == product_id, Product.deleted_at.is_(None))
        .first()
    )
    if product is None:
        raise NotFoundError("Product not found")

    db.add(ClickEvent(product_id=product.id, user_id=visitor.id if visitor else None))
    db.execute(update(Product).where(Product.id == product.id).values(clicks=Product.clicks + 1))
    commit_or_rollback(db, "record click")
    db.refresh(product)

    _send_click_alert(db, product, email)
    return product
