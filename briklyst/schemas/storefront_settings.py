"""Write-side shapes for storefront settings.

Every field is optional. A field left out of a request means "inherit", an
explicit ``null`` inside ``template_overrides`` removes a stored override.
Unknown keys are rejected so malformed trees never reach storage.
"""
from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from briklyst.services.section_types import SECTION_TYPES

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
URL_PATTERN = re.compile(r"^https?://")
# style tokens end up inside a <style> block
STYLE_TOKEN_PATTERN = re.compile(r"^[^;{}<>\"\\]{1,160}$")


def check_hex(value: str | None) -> str | None:
    if value is None:
        return value
    candidate = value.strip()
    if not HEX_COLOR_PATTERN.match(candidate):
        raise ValueError("Must be a hex color such as #RRGGBB")
    return candidate


def check_style_token(value: str | None) -> str | None:
    if value is None:
        return value
    candidate = value.strip()
    if not STYLE_TOKEN_PATTERN.match(candidate):
        raise ValueError("Invalid style value")
    return candidate


def check_url(value: str | None) -> str | None:
    if value is None:
        return value
    candidate = value.strip()
    if candidate.startswith("/uploads/"):
        return candidate
    if not URL_PATTERN.match(candidate):
        raise ValueError("URL must start with http:// or https://")
    return candidate


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ColorOverrides(StrictModel):
    primary: str | None = None
    secondary: str | None = None
    accent: str | None = None
    background: str | None = None
    text: str | None = None

    @field_validator("primary", "secondary", "accent", "background", "text")
    @classmethod
    def validate_color(cls, value: str | None) -> str | None:
        return check_hex(value)


class FontOverrides(StrictModel):
    heading: str | None = None
    body: str | None = None

    @field_validator("heading", "body")
    @classmethod
    def validate_font(cls, value: str | None) -> str | None:
        return check_style_token(value)


class LayoutOverrides(StrictModel):
    spacing: str | None = None
    container_width: str | None = Field(default=None, alias="containerWidth")
    border_radius: str | None = Field(default=None, alias="borderRadius")

    @field_validator("spacing", "container_width", "border_radius")
    @classmethod
    def validate_length(cls, value: str | None) -> str | None:
        return check_style_token(value)


class ImageStyleOverrides(StrictModel):
    border: str | None = None
    shadow: str | None = None

    @field_validator("border", "shadow")
    @classmethod
    def validate_token(cls, value: str | None) -> str | None:
        return check_style_token(value)


class AccentElementOverrides(StrictModel):
    dividers: str | None = None
    icons: str | None = None
    product_card: str | None = Field(default=None, alias="productCard")

    @field_validator("dividers", "icons", "product_card")
    @classmethod
    def validate_token(cls, value: str | None) -> str | None:
        return check_style_token(value)


class BannerStyleOverrides(StrictModel):
    overlay: str | None = None
    gradient: str | None = None

    @field_validator("overlay", "gradient")
    @classmethod
    def validate_token(cls, value: str | None) -> str | None:
        return check_style_token(value)


class TemplateOverrides(StrictModel):
    colors: ColorOverrides | None = None
    fonts: FontOverrides | None = None
    layout: LayoutOverrides | None = None
    button_style: str | None = Field(default=None, alias="buttonStyle")
    image_style: ImageStyleOverrides | None = Field(default=None, alias="imageStyle")
    accent_elements: AccentElementOverrides | None = Field(default=None, alias="accentElements")
    banner_style: BannerStyleOverrides | None = Field(default=None, alias="bannerStyle")

    @field_validator("button_style")
    @classmethod
    def validate_button_style(cls, value: str | None) -> str | None:
        return check_style_token(value)


class ButtonStyles(StrictModel):
    primary: str | None = None
    secondary: str | None = None

    @field_validator("primary", "secondary")
    @classmethod
    def validate_color(cls, value: str | None) -> str | None:
        return check_hex(value)


class BrandingAssets(StrictModel):
    logo: str | None = None
    banner: str | None = None
    favicon: str | None = None
    button_styles: ButtonStyles | None = Field(default=None, alias="buttonStyles")
    color_palette: list[str] | None = Field(default=None, alias="colorPalette", max_length=12)

    @field_validator("logo", "banner", "favicon")
    @classmethod
    def validate_asset_url(cls, value: str | None) -> str | None:
        return check_url(value)

    @field_validator("color_palette")
    @classmethod
    def validate_palette(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        return [check_hex(color) for color in value]


class LayoutPreferences(StrictModel):
    header_style: Literal["minimal", "standard", "expanded"] | None = Field(default=None, alias="headerStyle")
    footer_style: Literal["minimal", "standard", "expanded"] | None = Field(default=None, alias="footerStyle")
    sidebar_position: Literal["left", "right"] | None = Field(default=None, alias="sidebarPosition")
    show_breadcrumbs: bool | None = Field(default=None, alias="showBreadcrumbs")
    container_width: int | None = Field(default=None, alias="containerWidth", ge=320, le=3840)
    spacing: int | None = Field(default=None, ge=0, le=256)


class Typography(StrictModel):
    heading_font: str | None = Field(default=None, alias="headingFont")
    body_font: str | None = Field(default=None, alias="bodyFont")
    base_size: int | None = Field(default=None, alias="baseSize", ge=10, le=32)
    scale: float | None = Field(default=None, ge=1.0, le=2.0)

    @field_validator("heading_font", "body_font")
    @classmethod
    def validate_font(cls, value: str | None) -> str | None:
        return check_style_token(value)


class Section(StrictModel):
    id: str = Field(min_length=1, max_length=64)
    type: str
    content: dict[str, Any] = Field(default_factory=dict)
    order: int = 0

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        if value not in SECTION_TYPES:
            raise ValueError("Unknown section type")
        return value


class SocialLink(StrictModel):
    platform: str = Field(min_length=1, max_length=40)
    url: str
    order: int = 0

    @field_validator("url")
    @classmethod
    def validate_link(cls, value: str) -> str:
        return check_url(value)


class CollabHighlight(StrictModel):
    id: str = Field(min_length=1, max_length=64)
    title: str = Field(min_length=1, max_length=160)
    description: str = Field(default="", max_length=2000)
    image_url: str = Field(alias="imageUrl")
    link: str | None = None

    @field_validator("image_url", "link")
    @classmethod
    def validate_link(cls, value: str | None) -> str | None:
        return check_url(value)


class SubscriberBlock(StrictModel):
    enabled: bool | None = None
    title: str | None = Field(default=None, max_length=160)
    description: str | None = Field(default=None, max_length=500)
    button_text: str | None = Field(default=None, alias="buttonText", max_length=60)
    success_message: str | None = Field(default=None, alias="successMessage", max_length=200)


class StorefrontSettingsPayload(StrictModel):
    template_id: str | None = Field(default=None, alias="templateId")
    theme_id: str | None = Field(default=None, alias="themeId")
    template_overrides: TemplateOverrides | None = Field(default=None, alias="templateOverrides")
    branding_assets: BrandingAssets | None = Field(default=None, alias="brandingAssets")
    layout: LayoutPreferences | None = None
    typography: Typography | None = None
    sections: list[Section] | None = Field(default=None, max_length=50)
    custom_css: str | None = Field(default=None, alias="customCss", max_length=20000)
    social_links: list[SocialLink] | None = Field(default=None, alias="socialLinks", max_length=30)
    collab_highlights: list[CollabHighlight] | None = Field(default=None, alias="collabHighlights", max_length=30)
    subscriber_block: SubscriberBlock | None = Field(default=None, alias="subscriberBlock")

    def changes(self) -> dict[str, Any]:
        """Top-level fields present in the request, keyed by column name."""
        changed = self.model_dump(exclude_unset=True)
        for name in ("sections", "social_links", "collab_highlights"):
            if changed.get(name) is not None:
                changed[name] = [item.model_dump() for item in getattr(self, name)]
        return changed
