"""Turn a stored settings record into a complete presentation.

Three tiers, later ones win: template defaults, then the theme, then the
storefront's own override tree. Every nested group is merged leaf by leaf, so
overriding ``colors.accent`` leaves ``colors.primary`` untouched. All
defaulting for render code happens here.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Mapping

from briklyst.schemas.presentation import ResolvedPresentation
from briklyst.services.section_types import section_defaults
from briklyst.services.template_catalog import BASELINE_TEMPLATE, find_template_by_id
from briklyst.services.theme_catalog import find_theme_by_id

OVERRIDE_GROUPS = ("colors", "fonts", "layout", "image_style", "accent_elements", "banner_style")
OVERRIDE_SCALARS = ("button_style",)

SETTINGS_FIELDS = (
    "template_id",
    "theme_id",
    "template_overrides",
    "branding_assets",
    "layout",
    "typography",
    "sections",
    "custom_css",
    "social_links",
    "collab_highlights",
    "subscriber_block",
)

DEFAULT_PAGE_LAYOUT = {
    "header_style": "standard",
    "footer_style": "standard",
    "sidebar_position": "left",
    "show_breadcrumbs": False,
    "container_width": 1200,
    "spacing": 24,
}

DEFAULT_SUBSCRIBER_BLOCK = {
    "enabled": True,
    "title": "Join my list",
    "description": "New drops and favorite finds, straight to your inbox.",
    "button_text": "Subscribe",
    "success_message": "Thanks for subscribing!",
}

DEFAULT_BASE_SIZE = 16
DEFAULT_TYPE_SCALE = 1.25


def overlay_leaves(base: Mapping[str, Any], layer: Mapping[str, Any] | None) -> dict[str, Any]:
    """Copy ``base`` and replace only the leaves ``layer`` sets to a value."""
    merged = dict(base)
    if not layer:
        return merged
    for key, value in layer.items():
        if key in merged and value is not None:
            merged[key] = value
    return merged


def merge_override_trees(
    stored: Mapping[str, Any] | None,
    incoming: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Merge an incoming override tree into the stored one.

    Groups are merged per leaf. A ``None`` leaf (or group) in ``incoming``
    drops the stored value so it inherits again; keys missing from
    ``incoming`` keep what was stored.
    """
    merged: dict[str, Any] = {
        key: dict(value) if isinstance(value, Mapping) else value
        for key, value in (stored or {}).items()
    }
    for key, value in (incoming or {}).items():
        if value is None:
            merged.pop(key, None)
            continue
        if key in OVERRIDE_GROUPS and isinstance(value, Mapping):
            group = dict(merged.get(key) or {})
            for leaf, leaf_value in value.items():
                if leaf_value is None:
                    group.pop(leaf, None)
                else:
                    group[leaf] = leaf_value
            if group:
                merged[key] = group
            else:
                merged.pop(key, None)
            continue
        merged[key] = value
    return merged


def apply_settings_changes(
    current: Mapping[str, Any] | None,
    changes: Mapping[str, Any],
    *,
    replace_overrides: bool = False,
) -> dict[str, Any]:
    """Return the field values a save of ``changes`` writes over ``current``.

    An explicit ``None`` for ``template_overrides`` clears the whole tree;
    any other tree is merged into the stored one, or replaces it when
    ``replace_overrides`` is set.
    """
    applied: dict[str, Any] = {}
    for field, value in changes.items():
        if field != "template_overrides":
            applied[field] = value
        elif value is None:
            applied[field] = None
        else:
            base = None if replace_overrides else (current or {}).get(field)
            applied[field] = merge_override_trees(base, value) or None
    return applied


def settings_snapshot(settings_row: Any | None) -> dict[str, Any]:
    if settings_row is None:
        return {}
    return {field: getattr(settings_row, field, None) for field in SETTINGS_FIELDS}


def _sorted_by_order(items: list[Mapping[str, Any]] | None) -> list[dict[str, Any]]:
    # sorted() is stable, so equal orders keep insertion order
    return sorted((dict(item) for item in items or []), key=lambda item: item.get("order", 0))


def _resolve_sections(raw_sections: list[Mapping[str, Any]] | None) -> list[dict[str, Any]]:
    resolved = []
    for section in _sorted_by_order(raw_sections):
        content = section_defaults(section["type"])
        content.update(section.get("content") or {})
        resolved.append(
            {
                "id": section["id"],
                "type": section["type"],
                "content": content,
                "order": section.get("order", 0),
            }
        )
    return resolved


def resolve_presentation(settings: Mapping[str, Any] | None) -> ResolvedPresentation:
    settings = settings or {}

    template = find_template_by_id(settings.get("template_id")) or BASELINE_TEMPLATE
    explicit_theme_id = settings.get("theme_id")
    theme = find_theme_by_id(explicit_theme_id or template.default_theme_id)

    colors = asdict(template.default_colors)
    fonts = asdict(template.default_fonts)
    layout = asdict(template.default_layout)
    if explicit_theme_id:
        colors = overlay_leaves(colors, theme.color_set())
        fonts = overlay_leaves(fonts, asdict(theme.fonts))

    button_style = theme.button_style
    image_style = asdict(theme.image_style)
    accent_elements = asdict(theme.accent_elements)
    banner_style = asdict(theme.banner_style)

    overrides = settings.get("template_overrides") or {}
    colors = overlay_leaves(colors, overrides.get("colors"))
    fonts = overlay_leaves(fonts, overrides.get("fonts"))
    layout = overlay_leaves(layout, overrides.get("layout"))
    image_style = overlay_leaves(image_style, overrides.get("image_style"))
    accent_elements = overlay_leaves(accent_elements, overrides.get("accent_elements"))
    banner_style = overlay_leaves(banner_style, overrides.get("banner_style"))
    button_style = overrides.get("button_style") or button_style

    branding_raw = settings.get("branding_assets") or {}
    button_styles = overlay_leaves(
        {"primary": colors["primary"], "secondary": colors["secondary"]},
        branding_raw.get("button_styles"),
    )
    palette = branding_raw.get("color_palette") or [
        colors["primary"],
        colors["secondary"],
        colors["accent"],
        colors["background"],
        colors["text"],
    ]
    branding = {
        "logo": branding_raw.get("logo"),
        "banner": branding_raw.get("banner"),
        "favicon": branding_raw.get("favicon"),
        "button_styles": button_styles,
        "color_palette": list(palette),
    }

    typography = overlay_leaves(
        {
            "heading_font": fonts["heading"],
            "body_font": fonts["body"],
            "base_size": DEFAULT_BASE_SIZE,
            "scale": DEFAULT_TYPE_SCALE,
        },
        settings.get("typography"),
    )

    collab_highlights = [
        {
            "id": item["id"],
            "title": item["title"],
            "description": item.get("description") or "",
            "image_url": item["image_url"],
            "link": item.get("link"),
        }
        for item in settings.get("collab_highlights") or []
    ]

    return ResolvedPresentation(
        template_id=template.id,
        theme_id=theme.id,
        colors=colors,
        fonts=fonts,
        layout=layout,
        button_style=button_style,
        image_style=image_style,
        accent_elements=accent_elements,
        banner_style=banner_style,
        branding=branding,
        page_layout=overlay_leaves(DEFAULT_PAGE_LAYOUT, settings.get("layout")),
        typography=typography,
        sections=_resolve_sections(settings.get("sections")),
        custom_css=settings.get("custom_css") or "",
        social_links=[
            {"platform": link["platform"], "url": link["url"], "order": link.get("order", 0)}
            for link in _sorted_by_order(settings.get("social_links"))
        ],
        collab_highlights=collab_highlights,
        subscriber_block=overlay_leaves(DEFAULT_SUBSCRIBER_BLOCK, settings.get("subscriber_block")),
    )
