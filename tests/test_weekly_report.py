from briklyst.mailer.base import EmailSendResult
from briklyst.mailer.mock_provider import MockEmailProvider
from briklyst.mailer.service import EmailService
from briklyst.models.product import Product
from briklyst.routers import reports
from briklyst.services.storefronts import ensure_storefront
from briklyst.services.weekly_report import send_weekly_reports
from tests.support import build_client, create_user, make_session_factory


class SelectiveProvider(MockEmailProvider):
    """Fails for one address and delivers everything else."""

    def __init__(self, failing_address):
        super().__init__()
        self.failing_address = failing_address

    def send(self, *, to, subject, html):
        if to == self.failing_address:
            return EmailSendResult(status="failed", provider=self.name, error="mailbox unavailable")
        return super().send(to=to, subject=subject, html=html)


def _seed(session_factory):
    db = session_factory()
    for name in ("ava", "ben", "cam"):
        user = create_user(db, name, weekly_report=True)
        storefront = ensure_storefront(db, user)
        db.add(
            Product(
                storefront_id=storefront.id,
                title=f"{name} <pick>",
                price=10,
                affiliate_url="https://shop.example.com",
                clicks=4,
            )
        )
    # opted out, and one without a storefront yet
    create_user(db, "dee", weekly_report=False)
    create_user(db, "eli", weekly_report=True)
    db.commit()
    return db


def test_one_failed_send_does_not_stop_the_batch():
    session_factory = make_session_factory()
    db = _seed(session_factory)
    provider = SelectiveProvider("ben@example.com")

    summary = send_weekly_reports(db, session_factory, EmailService(provider), max_workers=1)

    assert summary.as_dict() == {"sent": 2, "failed": 1, "skipped": 1}
    assert sorted(message["to"] for message in provider.outbox) == ["ava@example.com", "cam@example.com"]
    report = next(message for message in provider.outbox if message["to"] == "ava@example.com")
    assert "ava &lt;pick&gt;" in report["html"]
    assert "All-time clicks: <strong>4</strong>" in report["html"]


def test_weekly_route_returns_summary(monkeypatch):
    session_factory = make_session_factory()
    db = _seed(session_factory)
    provider = MockEmailProvider()
    monkeypatch.setattr(reports, "CRON_SECRET", "")
    monkeypatch.setattr(reports, "WEEKLY_REPORT_MAX_CONCURRENCY", 1)
    client = build_client(
        db,
        reports.router,
        email_service=EmailService(provider),
        session_factory=session_factory,
    )

    response = client.post("/api/reports/weekly")

    assert response.status_code == 200
    assert response.json() == {"sent": 3, "failed": 0, "skipped": 1}


def test_weekly_route_requires_cron_secret(monkeypatch):
    session_factory = make_session_factory()
    db = session_factory()
    monkeypatch.setattr(reports, "CRON_SECRET", "s3cret")
    client = build_client(db, reports.router, session_factory=session_factory)

    missing = client.post("/api/reports/weekly")
    wrong = client.post("/api/reports/weekly", headers={"Authorization": "Bearer nope"})
    allowed = client.post("/api/reports/weekly", headers={"Authorization": "Bearer s3cret"})

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert allowed.status_code == 200
    assert allowed.json() == {"sent": 0, "failed": 0, "skipped": 0}
