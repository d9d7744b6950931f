from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from briklyst.models.click_event import ClickEvent
from briklyst.models.product import Product
from briklyst.models.user import User
from briklyst.schemas.product import AnalyticsResponse, DailyClicks, ProductClickStats
from briklyst.services.storefronts import ensure_storefront

WINDOW_DAYS = 7


def recent_clicks(db: Session, storefront_id: int, *, days: int = WINDOW_DAYS) -> list[tuple[int, datetime]]:
    since = datetime.now(timezone.utc) - timedelta(days=days)
    return (
        db.query(ClickEvent.product_id, ClickEvent.created_at)
        .join(Product, Product.id == ClickEvent.product_id)
        .filter(Product.storefront_id == storefront_id, ClickEvent.created_at >= since)
        .all()
    )


def get_analytics(db: Session, user: User) -> AnalyticsResponse:
    storefront = ensure_storefront(db, user)
    products = (
        db.query(Product)
        .filter(Product.storefront_id == storefront.id, Product.deleted_at.is_(None))
        .order_by(Product.clicks.desc(), Product.id.asc())
        .all()
    )

    events = recent_clicks(db, storefront.id)
    per_product = Counter(product_id for product_id, _ in events)
    per_day = Counter(created_at.date().isoformat() for _, created_at in events)

    today = datetime.now(timezone.utc).date()
    daily = [
        DailyClicks(date=day.isoformat(), clicks=per_day.get(day.isoformat(), 0))
        for day in (today - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1))
    ]

    return AnalyticsResponse(
        storefront_id=storefront.id,
        total_clicks=sum(product.clicks for product in products),
        clicks_last_7_days=len(events),
        products=[
            ProductClickStats(
                id=product.id,
                title=product.title,
                clicks=product.clicks,
                clicks_last_7_days=per_product.get(product.id, 0),
            )
            for product in products
        ],
        daily=daily,
    )
