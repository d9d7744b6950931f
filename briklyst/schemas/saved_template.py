from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from briklyst.schemas.storefront_settings import StorefrontSettingsPayload


class SavedTemplateCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    is_public: bool = Field(default=False, alias="isPublic")
    # omitted: snapshot the caller's current settings
    settings: StorefrontSettingsPayload | None = None


class SavedTemplateUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=2000)
    is_public: bool | None = Field(default=None, alias="isPublic")


class SavedTemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    settings: dict[str, Any]
    is_public: bool
    owned: bool = False
    created_at: datetime
