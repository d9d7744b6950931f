"""Storefront starting templates.

A template seeds colors, fonts and layout. Styling groups templates do not
define (buttons, images, accents, banners) come from its ``default_theme_id``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field

from briklyst.services.theme_catalog import DEFAULT_THEME_ID, FontPair


@dataclass(frozen=True)
class ColorSet:
    primary: str
    secondary: str
    accent: str
    background: str
    text: str


@dataclass(frozen=True)
class LayoutDefaults:
    spacing: str
    container_width: str
    border_radius: str


@dataclass(frozen=True)
class Template:
    id: str
    name: str
    description: str
    preview_image: str
    default_colors: ColorSet
    default_fonts: FontPair
    default_layout: LayoutDefaults
    features: tuple[str, ...] = field(default_factory=tuple)
    default_theme_id: str = DEFAULT_THEME_ID

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["features"] = list(self.features)
        return payload


TEMPLATES: tuple[Template, ...] = (
    Template(
        id="minimal",
        name="Minimal",
        description="Clean and simple design with focus on products",
        preview_image="/templates/minimal.png",
        default_colors=ColorSet("#000000", "#ffffff", "#666666", "#ffffff", "#000000"),
        default_fonts=FontPair(heading="Inter", body="Inter"),
        default_layout=LayoutDefaults(spacing="1.5rem", container_width="1200px", border_radius="0.5rem"),
        features=("Clean typography", "Ample white space", "Focus on products", "Minimal distractions"),
        default_theme_id="classic-editorial",
    ),
    Template(
        id="modern",
        name="Modern",
        description="Contemporary design with bold elements",
        preview_image="/templates/modern.png",
        default_colors=ColorSet("#2563eb", "#1e40af", "#3b82f6", "#f8fafc", "#1e293b"),
        default_fonts=FontPair(heading="Poppins", body="Inter"),
        default_layout=LayoutDefaults(spacing="2rem", container_width="1280px", border_radius="1rem"),
        features=("Bold typography", "Dynamic layouts", "Modern animations", "Interactive elements"),
        default_theme_id="digital-bold",
    ),
    Template(
        id="vintage",
        name="Vintage",
        description="Classic design with retro elements",
        preview_image="/templates/vintage.png",
        default_colors=ColorSet("#854d0e", "#fef3c7", "#d97706", "#fef3c7", "#78350f"),
        default_fonts=FontPair(heading="Playfair Display", body="Lora"),
        default_layout=LayoutDefaults(spacing="2rem", container_width="1200px", border_radius="0.25rem"),
        features=("Classic typography", "Warm color palette", "Vintage textures", "Elegant borders"),
        default_theme_id="sunset-luxe",
    ),
    Template(
        id="bold",
        name="Bold",
        description="High contrast design with strong visual impact",
        preview_image="/templates/bold.png",
        default_colors=ColorSet("#dc2626", "#1f2937", "#f97316", "#111827", "#ffffff"),
        default_fonts=FontPair(heading="Montserrat", body="Open Sans"),
        default_layout=LayoutDefaults(spacing="2.5rem", container_width="1400px", border_radius="0.75rem"),
        features=("High contrast", "Bold typography", "Strong visual hierarchy", "Impactful imagery"),
        default_theme_id="midnight-mode",
    ),
    Template(
        id="elegant",
        name="Elegant",
        description="Sophisticated design with refined details",
        preview_image="/templates/elegant.png",
        default_colors=ColorSet("#4b5563", "#f3f4f6", "#9ca3af", "#ffffff", "#374151"),
        default_fonts=FontPair(heading="Cormorant Garamond", body="Cormorant"),
        default_layout=LayoutDefaults(spacing="2rem", container_width="1200px", border_radius="0.375rem"),
        features=("Refined typography", "Subtle animations", "Elegant spacing", "Sophisticated color palette"),
        default_theme_id="sleek-chic",
    ),
    Template(
        id="sleek-noir",
        name="Sleek Noir",
        description="Dark storefront with glossy product cards",
        preview_image="/templates/sleek-noir.png",
        default_colors=ColorSet("#111112", "#ffffff", "#2D2D32", "#18181B", "#F5F5F7"),
        default_fonts=FontPair(heading="Inter", body="Inter"),
        default_layout=LayoutDefaults(spacing="1.75rem", container_width="1200px", border_radius="1.25rem"),
        features=("Dark surfaces", "Glass product cards", "High contrast text", "Compact hero"),
        default_theme_id="sleek-noir",
    ),
)

# Used whenever a storefront has no template, or one that is no longer in the catalog.
BASELINE_TEMPLATE = Template(
    id="baseline",
    name="Baseline",
    description="Plain white page with black sans-serif text",
    preview_image="",
    default_colors=ColorSet("#000000", "#ffffff", "#666666", "#ffffff", "#000000"),
    default_fonts=FontPair(heading="sans-serif", body="sans-serif"),
    default_layout=LayoutDefaults(spacing="1.5rem", container_width="1200px", border_radius="0.5rem"),
)


def find_template_by_id(template_id: str | None) -> Template | None:
    if not template_id:
        return None
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    return None


def list_templates() -> list[dict]:
    return [template.to_dict() for template in TEMPLATES]
