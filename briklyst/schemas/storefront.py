from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from briklyst.schemas.presentation import ResolvedPresentation
from briklyst.schemas.storefront_settings import StrictModel, check_hex, check_style_token, check_url


class StorefrontUpdate(StrictModel):
    title: str | None = Field(default=None, min_length=1, max_length=160)
    description: str | None = Field(default=None, max_length=2000)
    domain: str | None = Field(default=None, max_length=255)
    logo_url: str | None = Field(default=None, alias="logoUrl")
    banner_url: str | None = Field(default=None, alias="bannerUrl")
    template_id: str | None = Field(default=None, alias="templateId")
    theme_id: str | None = Field(default=None, alias="themeId")
    primary_color: str | None = Field(default=None, alias="primaryColor")
    accent_color: str | None = Field(default=None, alias="accentColor")
    background_color: str | None = Field(default=None, alias="backgroundColor")
    text_color: str | None = Field(default=None, alias="textColor")
    font_family: str | None = Field(default=None, alias="fontFamily")

    @field_validator("primary_color", "accent_color", "background_color", "text_color")
    @classmethod
    def validate_color(cls, value: str | None) -> str | None:
        return check_hex(value)

    @field_validator("font_family")
    @classmethod
    def validate_font(cls, value: str | None) -> str | None:
        return check_style_token(value)

    @field_validator("logo_url", "banner_url")
    @classmethod
    def validate_asset(cls, value: str | None) -> str | None:
        return check_url(value)


class ProfileUpdate(StrictModel):
    description: str | None = Field(default=None, max_length=2000)
    logo_url: str | None = Field(default=None, alias="logoUrl")
    banner_url: str | None = Field(default=None, alias="bannerUrl")

    @field_validator("logo_url", "banner_url")
    @classmethod
    def validate_asset(cls, value: str | None) -> str | None:
        return check_url(value)


class ThemeUpdate(StrictModel):
    theme_id: str | None = Field(default=None, alias="themeId")


class StorefrontPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    title: str
    description: str | None = None
    domain: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    primary_color: str
    accent_color: str
    background_color: str
    text_color: str
    font_family: str
    theme_id: str


class ProductPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    price: float
    image_url: str | None = None
    affiliate_url: str
    clicks: int
    created_at: datetime


class StorefrontView(BaseModel):
    storefront: StorefrontPublic
    presentation: ResolvedPresentation
    css_variables: dict[str, str]
    products: list[ProductPublic]


class StorefrontSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    storefront_id: int
    template_id: str | None = None
    theme_id: str | None = None
    template_overrides: dict[str, Any] | None = None
    branding_assets: dict[str, Any] | None = None
    layout: dict[str, Any] | None = None
    typography: dict[str, Any] | None = None
    sections: list[dict[str, Any]] | None = None
    custom_css: str | None = None
    social_links: list[dict[str, Any]] | None = None
    collab_highlights: list[dict[str, Any]] | None = None
    subscriber_block: dict[str, Any] | None = None
    updated_at: datetime | None = None


class SettingsWithPresentation(BaseModel):
    settings: StorefrontSettingsRead
    presentation: ResolvedPresentation


class PreviewResponse(BaseModel):
    presentation: ResolvedPresentation
    css_variables: dict[str, str]
    style: str
