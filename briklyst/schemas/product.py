from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from briklyst.schemas.storefront_settings import StrictModel, check_url


class ProductCreate(StrictModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    price: float = Field(default=0, ge=0)
    image_url: str | None = Field(default=None, alias="imageUrl")
    affiliate_url: str = Field(..., alias="affiliateUrl")

    @field_validator("image_url", "affiliate_url")
    @classmethod
    def validate_links(cls, value: str | None) -> str | None:
        return check_url(value)


class ProductUpdate(StrictModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    price: float | None = Field(default=None, ge=0)
    image_url: str | None = Field(default=None, alias="imageUrl")
    affiliate_url: str | None = Field(default=None, alias="affiliateUrl")

    @field_validator("image_url", "affiliate_url")
    @classmethod
    def validate_links(cls, value: str | None) -> str | None:
        return check_url(value)


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    storefront_id: int
    title: str
    description: str | None = None
    price: float
    image_url: str | None = None
    affiliate_url: str
    clicks: int
    created_at: datetime


class BulkImportPayload(BaseModel):
    # rows are validated one at a time so a bad row cannot reject the batch
    products: list[dict[str, Any]] = Field(..., max_length=500)


class BulkImportError(BaseModel):
    index: int
    error: str


class BulkImportResult(BaseModel):
    count: int
    failed: int
    errors: list[BulkImportError]


class ClickResponse(BaseModel):
    product_id: int
    clicks: int
    affiliate_url: str


class ProductClickStats(BaseModel):
    id: int
    title: str
    clicks: int
    clicks_last_7_days: int


class DailyClicks(BaseModel):
    date: str
    clicks: int


class AnalyticsResponse(BaseModel):
    storefront_id: int
    total_clicks: int
    clicks_last_7_days: int
    products: list[ProductClickStats]
    daily: list[DailyClicks]
