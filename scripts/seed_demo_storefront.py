#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from briklyst.core.database import SessionLocal  # noqa: E402
from briklyst.models.product import Product  # noqa: E402
from briklyst.models.user import User  # noqa: E402
from briklyst.services.storefront_settings import upsert_settings  # noqa: E402
from briklyst.services.storefronts import ensure_storefront  # noqa: E402

DEMO_PRODUCTS = (
    {
        "title": "Everyday Tote",
        "description": "Roomy canvas tote for daily errands.",
        "price": 39.0,
        "image_url": "https://images.unsplash.com/photo-1590874103328-eac38a683ce7",
        "affiliate_url": "https://example.com/products/everyday-tote",
    },
    {
        "title": "Glow Serum",
        "description": "Lightweight vitamin C serum.",
        "price": 24.5,
        "image_url": "https://images.unsplash.com/photo-1620916566398-39f1143ab7be",
        "affiliate_url": "https://example.com/products/glow-serum",
    },
    {
        "title": "Studio Headphones",
        "description": "Closed-back headphones for long edits.",
        "price": 129.99,
        "image_url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e",
        "affiliate_url": "https://example.com/products/studio-headphones",
    },
)

DEMO_SETTINGS = {
    "template_id": "sleek-noir",
    "template_overrides": {"colors": {"accent": "#E04FD4"}},
    "sections": [
        {"id": "hero", "type": "hero", "content": {"title": "My favorite finds"}, "order": 0},
        {"id": "featured", "type": "featured-products", "content": {}, "order": 1},
        {"id": "newsletter", "type": "newsletter", "content": {}, "order": 2},
    ],
    "social_links": [
        {"platform": "instagram", "url": "https://instagram.com/briklyst", "order": 0},
    ],
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed a demo storefront for an existing user.")
    parser.add_argument("--email", required=True, help="Email of an existing user")
    parser.add_argument("--reset-products", action="store_true", help="Soft-delete existing products first")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == args.email.lower()).first()
        if user is None:
            print(f"user not found: {args.email}")
            return 1

        storefront = ensure_storefront(db, user)
        upsert_settings(
            db,
            user,
            DEMO_SETTINGS,
            storefront_changes={"title": "Demo Storefront", "description": "A few things I actually use."},
        )

        if args.reset_products:
            for product in storefront.products:
                if product.deleted_at is None:
                    product.deleted_at = datetime.now(timezone.utc)
            db.flush()

        existing_titles = {
            product.title
            for product in db.query(Product)
            .filter(Product.storefront_id == storefront.id, Product.deleted_at.is_(None))
            .all()
        }
        created = 0
        for product in DEMO_PRODUCTS:
            if product["title"] in existing_titles:
                continue
            db.add(Product(storefront_id=storefront.id, **product))
            created += 1
        db.commit()
        print(f"storefront_id={storefront.id} products_created={created}")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
