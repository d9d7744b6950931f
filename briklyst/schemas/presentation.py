"""Fully resolved presentation shapes.

Nothing here is optional apart from asset URLs: render code reads these fields
directly and never supplies its own fallbacks.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ResolvedColors(BaseModel):
    primary: str
    secondary: str
    accent: str
    background: str
    text: str


class ResolvedFonts(BaseModel):
    heading: str
    body: str


class ResolvedLayout(BaseModel):
    spacing: str
    container_width: str
    border_radius: str


class ResolvedImageStyle(BaseModel):
    border: str
    shadow: str


class ResolvedAccentElements(BaseModel):
    dividers: str
    icons: str
    product_card: str


class ResolvedBannerStyle(BaseModel):
    overlay: str
    gradient: str


class ResolvedButtonStyles(BaseModel):
    primary: str
    secondary: str


class ResolvedBranding(BaseModel):
    logo: str | None = None
    banner: str | None = None
    favicon: str | None = None
    button_styles: ResolvedButtonStyles
    color_palette: list[str]


class ResolvedPageLayout(BaseModel):
    header_style: str
    footer_style: str
    sidebar_position: str
    show_breadcrumbs: bool
    container_width: int
    spacing: int


class ResolvedTypography(BaseModel):
    heading_font: str
    body_font: str
    base_size: int
    scale: float


class ResolvedSection(BaseModel):
    id: str
    type: str
    content: dict[str, Any]
    order: int


class ResolvedSocialLink(BaseModel):
    platform: str
    url: str
    order: int


class ResolvedCollabHighlight(BaseModel):
    id: str
    title: str
    description: str
    image_url: str
    link: str | None = None


class ResolvedSubscriberBlock(BaseModel):
    enabled: bool
    title: str
    description: str
    button_text: str
    success_message: str


class ResolvedPresentation(BaseModel):
    template_id: str
    theme_id: str
    colors: ResolvedColors
    fonts: ResolvedFonts
    layout: ResolvedLayout
    button_style: str
    image_style: ResolvedImageStyle
    accent_elements: ResolvedAccentElements
    banner_style: ResolvedBannerStyle
    branding: ResolvedBranding
    page_layout: ResolvedPageLayout
    typography: ResolvedTypography
    sections: list[ResolvedSection]
    custom_css: str
    social_links: list[ResolvedSocialLink]
    collab_highlights: list[ResolvedCollabHighlight]
    subscriber_block: ResolvedSubscriberBlock
