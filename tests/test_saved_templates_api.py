from briklyst.models.saved_template import SavedTemplate
from briklyst.models.storefront_settings import StorefrontSettings
from briklyst.routers.saved_templates import router as saved_templates_router
from briklyst.services.storefront_settings import upsert_settings
from tests.support import build_client, create_user, make_session, set_session_user


def test_snapshot_current_settings_and_apply_elsewhere():
    db = make_session()
    author = create_user(db, "ava")
    upsert_settings(
        db,
        author,
        {"template_id": "sleek-noir", "template_overrides": {"colors": {"accent": "#E04FD4"}}},
    )
    client = build_client(db, saved_templates_router, user=author)

    created = client.post("/api/storefront/saved-templates", json={"name": "Noir", "isPublic": True})

    assert created.status_code == 201
    assert created.json()["owned"] is True
    assert created.json()["settings"]["template_id"] == "sleek-noir"

    reader = create_user(db, "ben")
    upsert_settings(db, reader, {"template_overrides": {"fonts": {"body": "Lora"}}})
    set_session_user(client.app, reader)
    listed = client.get("/api/storefront/saved-templates")
    applied = client.post(f"/api/storefront/saved-templates/{created.json()['id']}/apply")

    assert [item["owned"] for item in listed.json()] == [False]
    assert applied.status_code == 200
    assert applied.json()["template_id"] == "sleek-noir"
    # applying replaces the override tree instead of merging into it
    assert applied.json()["template_overrides"] == {"colors": {"accent": "#E04FD4"}}
    row = db.query(StorefrontSettings).filter(StorefrontSettings.user_id == reader.id).one()
    assert row.storefront.accent_color == "#E04FD4"


def test_private_templates_are_hidden_from_other_users():
    db = make_session()
    author = create_user(db, "ava")
    client = build_client(db, saved_templates_router, user=author)
    created = client.post(
        "/api/storefront/saved-templates",
        json={"name": "Mine", "settings": {"themeId": "dreamy-lilac"}},
    )
    template_id = created.json()["id"]

    set_session_user(client.app, create_user(db, "ben"))

    assert client.get("/api/storefront/saved-templates").json() == []
    assert client.post(f"/api/storefront/saved-templates/{template_id}/apply").status_code == 404
    assert client.patch(f"/api/storefront/saved-templates/{template_id}", json={"name": "x"}).status_code == 404
    assert client.delete(f"/api/storefront/saved-templates/{template_id}").status_code == 404
    assert db.query(SavedTemplate).count() == 1


def test_rename_and_delete_own_template():
    db = make_session()
    client = build_client(db, saved_templates_router, user=create_user(db))
    template_id = client.post(
        "/api/storefront/saved-templates",
        json={"name": "Draft", "settings": {"templateId": "bold"}},
    ).json()["id"]

    renamed = client.patch(f"/api/storefront/saved-templates/{template_id}", json={"name": "Final"})
    deleted = client.delete(f"/api/storefront/saved-templates/{template_id}")

    assert renamed.json()["name"] == "Final"
    assert renamed.json()["settings"] == {"template_id": "bold"}
    assert deleted.status_code == 204
    assert db.query(SavedTemplate).count() == 0


def test_template_with_invalid_settings_is_rejected():
    db = make_session()
    client = build_client(db, saved_templates_router, user=create_user(db))

    response = client.post(
        "/api/storefront/saved-templates",
        json={"name": "Broken", "settings": {"templateOverrides": {"colors": {"accent": "red"}}}},
    )

    assert response.status_code == 400
    assert db.query(SavedTemplate).count() == 0
