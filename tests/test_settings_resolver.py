from dataclasses import asdict
from itertools import combinations

from briklyst.services.settings_resolver import (
    DEFAULT_SUBSCRIBER_BLOCK,
    merge_override_trees,
    overlay_leaves,
    resolve_presentation,
)
from briklyst.services.template_catalog import BASELINE_TEMPLATE, find_template_by_id
from briklyst.services.theme_catalog import DEFAULT_THEME_ID, find_theme_by_id


def test_accent_override_keeps_the_other_template_colors():
    presentation = resolve_presentation(
        {
            "template_id": "sleek-noir",
            "template_overrides": {"colors": {"accent": "#E04FD4"}},
        }
    )

    assert presentation.colors.accent == "#E04FD4"
    assert presentation.colors.primary == "#111112"
    assert presentation.colors.background == "#18181B"
    assert presentation.colors.text == "#F5F5F7"
    assert presentation.fonts.heading == "Inter"


def test_any_subset_of_color_leaves_changes_only_those_leaves():
    template = find_template_by_id("minimal")
    leaves = {
        "primary": "#101010",
        "secondary": "#202020",
        "accent": "#303030",
        "background": "#404040",
        "text": "#505050",
    }
    defaults = asdict(template.default_colors)

    for size in range(len(leaves) + 1):
        for subset in combinations(leaves, size):
            overrides = {name: leaves[name] for name in subset}
            colors = resolve_presentation(
                {"template_id": "minimal", "template_overrides": {"colors": overrides}}
            ).colors.model_dump()
            for name in leaves:
                expected = leaves[name] if name in subset else defaults[name]
                assert colors[name] == expected, (subset, name)


def test_missing_template_resolves_to_baseline_with_default_theme():
    presentation = resolve_presentation(None)

    assert presentation.template_id == BASELINE_TEMPLATE.id
    assert presentation.theme_id == DEFAULT_THEME_ID
    assert presentation.colors.primary == "#000000"
    assert presentation.colors.background == "#ffffff"
    assert presentation.subscriber_block.model_dump() == DEFAULT_SUBSCRIBER_BLOCK


def test_unknown_ids_fall_back_the_same_way_every_time():
    settings = {"template_id": "gone", "theme_id": "also-gone"}

    first = resolve_presentation(settings)
    second = resolve_presentation(settings)

    assert first == second
    assert first.template_id == BASELINE_TEMPLATE.id
    assert first.theme_id == DEFAULT_THEME_ID


def test_explicit_theme_recolors_template_but_keeps_layout():
    theme = find_theme_by_id("midnight-mode")
    presentation = resolve_presentation({"template_id": "minimal", "theme_id": "midnight-mode"})
    template = find_template_by_id("minimal")

    assert presentation.theme_id == "midnight-mode"
    assert presentation.colors.primary == theme.color_set()["primary"]
    assert presentation.colors.secondary == template.default_colors.secondary
    assert presentation.fonts.heading == theme.fonts.heading
    assert presentation.layout.container_width == template.default_layout.container_width
    assert presentation.button_style == theme.button_style


def test_template_default_theme_styles_without_changing_template_colors():
    template = find_template_by_id("modern")
    presentation = resolve_presentation({"template_id": "modern"})
    theme = find_theme_by_id(template.default_theme_id)

    assert presentation.theme_id == template.default_theme_id
    assert presentation.colors.primary == template.default_colors.primary
    assert presentation.image_style.border == theme.image_style.border


def test_sections_sort_stably_and_fill_defaults():
    presentation = resolve_presentation(
        {
            "sections": [
                {"id": "b", "type": "faq", "content": {"title": "second"}, "order": 2},
                {"id": "a", "type": "hero", "content": {}, "order": 1},
                {"id": "c", "type": "contact", "content": {"email": "hi@example.com"}, "order": 2},
            ]
        }
    )

    assert [section.id for section in presentation.sections] == ["a", "b", "c"]
    assert presentation.sections[0].content["title"] == "Welcome to my store"
    assert presentation.sections[1].content == {"title": "second", "faqs": []}
    assert presentation.sections[2].content["title"] == "Contact Us"


def test_branding_defaults_follow_resolved_colors():
    presentation = resolve_presentation(
        {
            "template_id": "sleek-noir",
            "template_overrides": {"colors": {"primary": "#123456"}},
            "branding_assets": {"button_styles": {"secondary": "#abcdef"}},
        }
    )

    assert presentation.branding.button_styles.primary == "#123456"
    assert presentation.branding.button_styles.secondary == "#abcdef"
    assert presentation.branding.color_palette[0] == "#123456"
    assert presentation.typography.body_font == presentation.fonts.body


def test_overlay_ignores_unknown_keys_and_none_values():
    merged = overlay_leaves({"a": 1, "b": 2}, {"a": None, "b": 3, "c": 4})

    assert merged == {"a": 1, "b": 3}


def test_null_leaf_removes_stored_override():
    stored = {"colors": {"accent": "#E04FD4", "primary": "#000001"}, "button_style": "pill"}

    merged = merge_override_trees(stored, {"colors": {"accent": None}})

    assert merged == {"colors": {"primary": "#000001"}, "button_style": "pill"}
    assert stored["colors"]["accent"] == "#E04FD4"


def test_null_group_and_emptied_group_are_dropped():
    stored = {"colors": {"accent": "#E04FD4"}, "fonts": {"body": "Inter"}}

    merged = merge_override_trees(stored, {"colors": {"accent": None}, "fonts": None})

    assert merged == {}


def test_missing_keys_keep_stored_overrides():
    stored = {"colors": {"accent": "#E04FD4"}}

    merged = merge_override_trees(stored, {"colors": {"primary": "#111111"}, "layout": {"spacing": "2rem"}})

    assert merged == {
        "colors": {"accent": "#E04FD4", "primary": "#111111"},
        "layout": {"spacing": "2rem"},
    }
