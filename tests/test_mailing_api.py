from briklyst.mailer.base import EmailSendResult
from briklyst.mailer.mock_provider import MockEmailProvider
from briklyst.mailer.service import EmailService
from briklyst.models.subscriber import Subscriber
from briklyst.routers.mailing import router as mailing_router
from briklyst.services.storefront_settings import upsert_settings
from briklyst.services.storefronts import ensure_storefront
from tests.support import build_client, create_user, make_session, set_session_user


def _storefront(db, name="ava"):
    user = create_user(db, name)
    return user, ensure_storefront(db, user)


def test_subscribe_returns_storefront_success_message():
    db = make_session()
    user, storefront = _storefront(db)
    upsert_settings(db, user, {"subscriber_block": {"success_message": "You're in!"}})
    client = build_client(db, mailing_router)

    response = client.post(
        "/api/subscribe",
        json={"storefrontId": storefront.id, "email": "Fan@Example.com", "name": "Fan"},
    )

    assert response.status_code == 201
    assert response.json() == {"message": "You're in!"}
    assert db.query(Subscriber).one().email == "fan@example.com"


def test_duplicate_subscription_is_rejected():
    db = make_session()
    _, storefront = _storefront(db)
    client = build_client(db, mailing_router)
    client.post("/api/subscribe", json={"storefrontId": storefront.id, "email": "fan@example.com"})

    response = client.post("/api/subscribe", json={"storefrontId": storefront.id, "email": "FAN@example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Email already subscribed"}
    assert db.query(Subscriber).count() == 1


def test_invalid_email_is_rejected():
    db = make_session()
    _, storefront = _storefront(db)
    client = build_client(db, mailing_router)

    response = client.post("/api/subscribe", json={"storefrontId": storefront.id, "email": "not-an-email"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid or missing field: email"}


def test_disabled_subscriber_block_closes_signups():
    db = make_session()
    user, storefront = _storefront(db)
    upsert_settings(db, user, {"subscriber_block": {"enabled": False}})
    client = build_client(db, mailing_router)

    response = client.post("/api/subscribe", json={"storefrontId": storefront.id, "email": "fan@example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Subscriptions are closed for this storefront"}


def test_subscribe_to_unknown_storefront_is_not_found():
    client = build_client(make_session(), mailing_router)

    response = client.post("/api/subscribe", json={"storefrontId": 404, "email": "fan@example.com"})

    assert response.status_code == 404


def test_owner_manages_subscribers():
    db = make_session()
    user, _ = _storefront(db)
    client = build_client(db, mailing_router, user=user)

    created = client.post("/api/email/subscribers", json={"email": "a@example.com", "tags": ["vip"]})
    subscriber_id = created.json()["id"]
    updated = client.put(f"/api/email/subscribers/{subscriber_id}", json={"name": "Alex"})
    listed = client.get("/api/email/subscribers")
    removed = client.delete(f"/api/email/subscribers/{subscriber_id}")

    assert created.status_code == 201
    assert updated.json()["name"] == "Alex"
    assert updated.json()["tags"] == ["vip"]
    assert [item["email"] for item in listed.json()] == ["a@example.com"]
    assert removed.status_code == 204
    assert db.query(Subscriber).count() == 0


def test_subscribers_are_isolated_between_owners():
    db = make_session()
    owner, _ = _storefront(db, "ava")
    other, _ = _storefront(db, "ben")
    client = build_client(db, mailing_router, user=owner)
    subscriber_id = client.post("/api/email/subscribers", json={"email": "a@example.com"}).json()["id"]

    set_session_user(client.app, other)

    assert client.get("/api/email/subscribers").json() == []
    assert client.delete(f"/api/email/subscribers/{subscriber_id}").status_code == 404
    assert db.query(Subscriber).count() == 1


def test_owner_manages_email_templates():
    db = make_session()
    user, _ = _storefront(db)
    client = build_client(db, mailing_router, user=user)

    created = client.post("/api/email/templates", json={"name": "Launch", "html": "<p>Hi</p>"})
    template_id = created.json()["id"]
    updated = client.put(f"/api/email/templates/{template_id}", json={"html": "<p>Hello</p>"})
    listed = client.get("/api/email/templates")

    assert created.status_code == 201
    assert updated.json()["html"] == "<p>Hello</p>"
    assert [item["name"] for item in listed.json()] == ["Launch"]

    set_session_user(client.app, create_user(db, "ben"))
    missing = client.put(f"/api/email/templates/{template_id}", json={"name": "Stolen"})
    assert missing.status_code == 404
    assert missing.json() == {"error": "Template not found"}


def test_send_test_email_uses_provider():
    db = make_session()
    user, _ = _storefront(db)
    provider = MockEmailProvider()
    client = build_client(db, mailing_router, user=user, email_service=EmailService(provider))

    response = client.post(
        "/api/email/send-test",
        json={"to": "me@example.com", "subject": "Preview", "html": "<p>Hi</p>"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "sent"
    assert provider.outbox[0]["subject"] == "Preview"


def test_send_test_email_reports_provider_failure():
    class DownProvider:
        name = "down"

        def send(self, *, to, subject, html):
            return EmailSendResult(status="failed", provider=self.name, error="connection refused")

    db = make_session()
    user, _ = _storefront(db)
    client = build_client(db, mailing_router, user=user, email_service=EmailService(DownProvider()))

    response = client.post("/api/email/send-test", json={"to": "me@example.com", "html": "<p>Hi</p>"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to send test email"}
