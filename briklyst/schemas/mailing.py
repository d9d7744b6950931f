from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SubscribePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    storefront_id: int = Field(..., alias="storefrontId")
    email: EmailStr
    name: str = Field(default="", max_length=120)


class SubscribeResponse(BaseModel):
    message: str


class SubscriberCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    name: str = Field(default="", max_length=120)
    tags: list[str] = Field(default_factory=list, max_length=30)


class SubscriberUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=120)
    tags: list[str] | None = Field(default=None, max_length=30)


class SubscriberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    tags: list[str]
    created_at: datetime


class EmailTemplateCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=120)
    design: dict[str, Any] = Field(default_factory=dict)
    html: str = Field(..., min_length=1, max_length=200_000)
    thumbnail: str = Field(default="", max_length=2000)


class EmailTemplateUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=120)
    design: dict[str, Any] | None = None
    html: str | None = Field(default=None, min_length=1, max_length=200_000)
    thumbnail: str | None = Field(default=None, max_length=2000)


class EmailTemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    design: dict[str, Any]
    html: str
    thumbnail: str
    created_at: datetime
    updated_at: datetime


class SendTestPayload(BaseModel):
    to: EmailStr
    subject: str = Field(default="Test email", min_length=1, max_length=200)
    html: str = Field(..., min_length=1, max_length=200_000)


class CampaignCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    template_id: int | None = Field(default=None, alias="templateId")
    subject: str = Field(..., min_length=1, max_length=200)
    html: str = Field(..., min_length=1, max_length=200_000)
    segment: str = Field(..., min_length=1, max_length=60)
    scheduled_at: datetime = Field(..., alias="scheduledAt")


class CampaignReschedule(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    scheduled_at: datetime = Field(..., alias="scheduledAt")


class CampaignRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    template_id: int | None = None
    subject: str
    html: str
    segment: str
    scheduled_at: datetime
    status: str
    recipients: int
    opens: int
    clicks: int
    created_at: datetime
