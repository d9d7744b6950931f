from briklyst.models.product import Product
from briklyst.routers.public_storefront import router as public_storefront_router
from briklyst.services.settings_resolver import resolve_presentation
from briklyst.services.storefront_settings import upsert_settings
from briklyst.services.storefronts import ensure_storefront
from briklyst.services.theme_application import (
    css_variables,
    email_tokens,
    preview_presentation,
    render_style_block,
)
from tests.support import build_client, create_user, make_session


def test_css_variables_cover_resolved_colors_and_layout():
    presentation = resolve_presentation({"template_id": "sleek-noir"})

    variables = css_variables(presentation)

    assert variables["--brk-color-primary"] == "#111112"
    assert variables["--brk-color-background"] == "#18181B"
    assert variables["--brk-container-width"] == "1200px"
    assert variables["--brk-font-body"] == '"Inter"'
    assert variables["--brk-base-size"] == "16px"


def test_generic_font_families_stay_unquoted():
    variables = css_variables(resolve_presentation({}))

    assert variables["--brk-font-heading"] == "sans-serif"
    assert variables["--brk-font-body"] == "sans-serif"
    assert "--brk-font-body: sans-serif;" in render_style_block(resolve_presentation({}))


def test_named_font_families_are_quoted():
    presentation = resolve_presentation({"template_id": "vintage", "template_overrides": {"fonts": {"body": "Open Sans"}}})

    assert css_variables(presentation)["--brk-font-body"] == '"Open Sans"'


def test_style_block_appends_custom_css_verbatim():
    presentation = resolve_presentation({"custom_css": ".hero > h1 { letter-spacing: 2px; }"})

    style = render_style_block(presentation)

    assert style.startswith(":root {")
    assert style.rstrip().endswith(".hero > h1 { letter-spacing: 2px; }")


def test_email_tokens_only_carry_primary_color():
    presentation = resolve_presentation({"template_id": "modern"})

    assert email_tokens(presentation) == {"primary_color": "#2563eb"}


def test_preview_does_not_mutate_stored_settings():
    stored = {"template_id": "bold", "template_overrides": {"colors": {"accent": "#123456"}}}

    preview = preview_presentation(stored, {"template_overrides": {"colors": {"accent": None}}})

    assert stored["template_overrides"] == {"colors": {"accent": "#123456"}}
    assert preview.colors.accent != "#123456"


def _seed_storefront(db):
    user = create_user(db, "maya")
    storefront = ensure_storefront(db, user)
    upsert_settings(
        db,
        user,
        {
            "template_id": "elegant",
            "custom_css": "body::after { content: '</style><script>alert(1)</script>'; }",
            "social_links": [
                {"platform": "tiktok", "url": "https://tiktok.com/@maya", "order": 2},
                {"platform": "instagram", "url": "https://instagram.com/maya", "order": 1},
            ],
        },
    )
    db.add(
        Product(
            storefront_id=storefront.id,
            title="Silk <Scarf>",
            price=49.5,
            affiliate_url="https://shop.example.com/scarf",
        )
    )
    db.commit()
    return user


def test_public_page_escapes_content_and_style():
    db = make_session()
    _seed_storefront(db)
    client = build_client(db, public_storefront_router)

    response = client.get("/storefronts/maya")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    page = response.text
    assert "Silk &lt;Scarf&gt;" in page
    assert "$49.50" in page
    assert "<script>alert(1)</script>" not in page
    assert "<\\/style>" in page
    assert page.index("instagram") < page.index("tiktok")
    assert 'action="/api/subscribe"' in page


def test_theme_css_serves_variables_and_custom_css():
    db = make_session()
    _seed_storefront(db)
    client = build_client(db, public_storefront_router)

    response = client.get("/storefronts/maya/theme.css")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/css")
    assert "--brk-color-primary:" in response.text
    assert "body::after" in response.text


def test_public_page_for_unknown_user_is_not_found():
    client = build_client(make_session(), public_storefront_router)

    response = client.get("/storefronts/nobody")

    assert response.status_code == 404
    assert response.json() == {"error": "Storefront not found"}
