from briklyst.routers.storefront_settings import router as storefront_settings_router
from briklyst.services.section_types import SECTION_TYPES, section_defaults
from briklyst.services.template_catalog import TEMPLATES, find_template_by_id
from briklyst.services.theme_catalog import DEFAULT_THEME_ID, THEMES, find_theme_by_id, get_theme
from tests.support import build_client, make_session


def test_theme_ids_are_unique_and_default_is_in_catalog():
    ids = [theme.id for theme in THEMES]

    assert len(ids) == len(set(ids))
    assert DEFAULT_THEME_ID in ids


def test_unknown_theme_falls_back_to_default():
    assert find_theme_by_id("does-not-exist").id == DEFAULT_THEME_ID
    assert find_theme_by_id(None).id == DEFAULT_THEME_ID
    assert find_theme_by_id("midnight-mode").id == "midnight-mode"
    assert get_theme("does-not-exist") is None


def test_unknown_template_is_not_found():
    assert find_template_by_id("does-not-exist") is None
    assert find_template_by_id(None) is None
    assert find_template_by_id("sleek-noir").default_colors.primary == "#111112"


def test_every_template_points_at_a_catalog_theme():
    for template in TEMPLATES:
        assert get_theme(template.default_theme_id) is not None, template.id


def test_section_defaults_are_copies():
    content = section_defaults("hero")
    content["title"] = "changed"

    assert section_defaults("hero")["title"] == "Welcome to my store"
    assert "custom-html" in SECTION_TYPES
    assert section_defaults("not-a-section") == {}


def test_catalog_endpoints_list_themes_and_templates():
    client = build_client(make_session(), storefront_settings_router)

    themes = client.get("/api/storefront/themes")
    templates = client.get("/api/storefront/templates")

    assert themes.status_code == 200
    assert [theme["id"] for theme in themes.json()["themes"]] == [theme.id for theme in THEMES]
    assert templates.status_code == 200
    sleek_noir = next(item for item in templates.json()["templates"] if item["id"] == "sleek-noir")
    assert sleek_noir["default_colors"]["background"] == "#18181B"
    assert isinstance(sleek_noir["features"], list)
