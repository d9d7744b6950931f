from briklyst.mailer.base import EmailSendResult
from briklyst.mailer.mock_provider import MockEmailProvider
from briklyst.mailer.service import EmailService
from briklyst.models.click_event import ClickEvent
from briklyst.models.product import Product
from briklyst.routers.products import router as products_router
from briklyst.services.storefronts import ensure_storefront
from tests.support import build_client, create_user, make_session, set_session_user

PRODUCT = {"title": "Desk Lamp", "price": 39.0, "affiliateUrl": "https://shop.example.com/lamp"}


class FailingProvider:
    name = "failing"

    def send(self, *, to, subject, html):
        return EmailSendResult(status="failed", provider=self.name, error="smtp down")


def test_create_and_list_products_newest_first():
    db = make_session()
    user = create_user(db)
    client = build_client(db, products_router, user=user)

    first = client.post("/api/products", json=PRODUCT)
    second = client.post("/api/products", json={**PRODUCT, "title": "Floor Lamp"})
    listed = client.get("/api/products")

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["affiliate_url"] == "https://shop.example.com/lamp"
    assert [item["title"] for item in listed.json()] == ["Floor Lamp", "Desk Lamp"]


def test_public_listing_needs_a_storefront_id():
    db = make_session()
    user = create_user(db)
    storefront = ensure_storefront(db, user)
    db.add(Product(storefront_id=storefront.id, title="Mug", price=12, affiliate_url="https://x.example.com"))
    db.commit()
    client = build_client(db, products_router)

    missing = client.get("/api/products")
    listed = client.get("/api/products", params={"storefrontId": storefront.id})

    assert missing.status_code == 400
    assert missing.json() == {"error": "Storefront ID is required"}
    assert [item["title"] for item in listed.json()] == ["Mug"]


def test_invalid_product_payload_is_rejected():
    db = make_session()
    client = build_client(db, products_router, user=create_user(db))

    response = client.post("/api/products", json={"title": "Lamp", "affiliateUrl": "javascript:alert(1)"})

    assert response.status_code == 400
    assert db.query(Product).count() == 0


def test_other_users_products_are_invisible_for_writes():
    db = make_session()
    owner = create_user(db, "ava")
    intruder = create_user(db, "ben")
    client = build_client(db, products_router, user=owner)
    product_id = client.post("/api/products", json=PRODUCT).json()["id"]

    set_session_user(client.app, intruder)
    updated = client.put(f"/api/products/{product_id}", json={"title": "Hijacked"})
    deleted = client.delete(f"/api/products/{product_id}")

    assert updated.status_code == 404
    assert updated.json() == {"error": "Product not found"}
    assert deleted.status_code == 404
    product = db.get(Product, product_id)
    db.refresh(product)
    assert product.title == "Desk Lamp"
    assert product.deleted_at is None


def test_update_and_soft_delete_own_product():
    db = make_session()
    user = create_user(db)
    client = build_client(db, products_router, user=user)
    product_id = client.post("/api/products", json=PRODUCT).json()["id"]

    updated = client.put(f"/api/products/{product_id}", json={"price": 29.5, "title": None})
    deleted = client.delete(f"/api/products/{product_id}")
    listed = client.get("/api/products")

    assert updated.status_code == 200
    assert updated.json()["price"] == 29.5
    assert updated.json()["title"] == "Desk Lamp"
    assert deleted.status_code == 204
    assert listed.json() == []
    assert db.query(Product).count() == 1


def test_bulk_import_reports_bad_rows_and_keeps_good_ones():
    db = make_session()
    client = build_client(db, products_router, user=create_user(db))

    response = client.post(
        "/api/products/bulk",
        json={
            "products": [
                PRODUCT,
                {"title": "", "affiliateUrl": "https://shop.example.com/empty"},
                {**PRODUCT, "title": "Lamp Shade"},
                {"title": "No link"},
            ]
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["failed"] == 2
    assert [error["index"] for error in body["errors"]] == [1, 3]
    assert body["errors"][1]["error"] == "Invalid or missing field: affiliateUrl"
    assert sorted(product.title for product in db.query(Product).all()) == ["Desk Lamp", "Lamp Shade"]


def test_anonymous_click_counts_and_records_null_visitor():
    db = make_session()
    owner = create_user(db)
    client = build_client(db, products_router, user=owner)
    product_id = client.post("/api/products", json=PRODUCT).json()["id"]
    set_session_user(client.app, None)

    first = client.post(f"/api/products/{product_id}/click")
    second = client.post(f"/api/products/{product_id}/click")

    assert first.status_code == 200
    assert first.json() == {
        "product_id": product_id,
        "clicks": 1,
        "affiliate_url": "https://shop.example.com/lamp",
    }
    assert second.json()["clicks"] == 2
    events = db.query(ClickEvent).filter(ClickEvent.product_id == product_id).all()
    assert len(events) == 2
    assert all(event.user_id is None for event in events)


def test_signed_in_click_records_visitor():
    db = make_session()
    owner = create_user(db, "ava")
    visitor = create_user(db, "ben")
    client = build_client(db, products_router, user=owner)
    product_id = client.post("/api/products", json=PRODUCT).json()["id"]
    set_session_user(client.app, visitor)

    client.post(f"/api/products/{product_id}/click")

    assert db.query(ClickEvent).one().user_id == visitor.id


def test_click_alert_goes_to_owner_with_theme_color():
    db = make_session()
    owner = create_user(db, click_alerts=True)
    provider = MockEmailProvider()
    client = build_client(db, products_router, user=owner, email_service=EmailService(provider))
    product_id = client.post("/api/products", json=PRODUCT).json()["id"]

    client.post(f"/api/products/{product_id}/click")

    assert len(provider.outbox) == 1
    message = provider.outbox[0]
    assert message["to"] == "ava@example.com"
    assert "Desk Lamp" in message["html"]
    assert "#000000" in message["html"]


def test_failed_click_alert_does_not_fail_the_click():
    db = make_session()
    owner = create_user(db, click_alerts=True)
    client = build_client(db, products_router, user=owner, email_service=EmailService(FailingProvider()))
    product_id = client.post("/api/products", json=PRODUCT).json()["id"]

    response = client.post(f"/api/products/{product_id}/click")

    assert response.status_code == 200
    assert response.json()["clicks"] == 1


def test_click_on_missing_product_is_not_found():
    client = build_client(make_session(), products_router)

    response = client.post("/api/products/999/click")

    assert response.status_code == 404


def test_analytics_summarizes_clicks():
    db = make_session()
    user = create_user(db)
    client = build_client(db, products_router, user=user)
    lamp = client.post("/api/products", json=PRODUCT).json()["id"]
    client.post("/api/products", json={**PRODUCT, "title": "Rug"})
    for _ in range(3):
        client.post(f"/api/products/{lamp}/click")

    response = client.get("/api/analytics")

    assert response.status_code == 200
    body = response.json()
    assert body["total_clicks"] == 3
    assert body["clicks_last_7_days"] == 3
    assert body["products"][0] == {"id": lamp, "title": "Desk Lamp", "clicks": 3, "clicks_last_7_days": 3}
    assert len(body["daily"]) == 7
    assert sum(day["clicks"] for day in body["daily"]) == 3
