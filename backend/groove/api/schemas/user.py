"""Schemas for user records."""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from groove.api.schemas.work_hours import WorkHoursPayload


class UserCreateRequest(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    timezone: str = Field(default="UTC", min_length=1, max_length=50)
    work_hours: Optional[WorkHoursPayload] = None

    @field_validator("name", "timezone")
    @classmethod
    def strip_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned


class UserResponse(BaseModel):
    id: UUID
    email: str
    name: str
    timezone: str
    work_hours: Optional[WorkHoursPayload]
    created_at: datetime
    request_id: str
