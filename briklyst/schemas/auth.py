from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,40}$")


class RegisterPayload(BaseModel):
    name: str = Field(..., min_length=3, max_length=40)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("name")
    @classmethod
    def validate_username(cls, value: str) -> str:
        candidate = value.strip()
        if not USERNAME_PATTERN.match(candidate):
            raise ValueError("Username may only contain letters, digits, dots, dashes and underscores")
        return candidate


class LoginPayload(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    weekly_report: bool
    click_alerts: bool


class NotificationPreferences(BaseModel):
    model_config = ConfigDict(extra="forbid")

    weekly_report: bool | None = None
    click_alerts: bool | None = None
