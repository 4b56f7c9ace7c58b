"""Schemas for habit management."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

HabitCategory = Literal["people", "activities", "responsibilities"]
HabitPriority = Literal["low", "medium", "high"]
FrequencyType = Literal["daily", "weekly", "monthly", "custom"]


class FrequencyPayload(BaseModel):
    type: FrequencyType
    interval: int = Field(default=1, ge=1)
    weekdays: Optional[List[int]] = None

    @field_validator("weekdays")
    @classmethod
    def validate_weekdays(cls, value: Optional[List[int]]) -> Optional[List[int]]:
        if value is None:
            return None
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("weekdays must be numbers between 0-6 (Sunday=0)")
        return sorted(set(value))


class HabitCreateRequest(BaseModel):
    user_id: UUID
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: HabitCategory
    priority: HabitPriority = "medium"
    frequency: FrequencyPayload
    duration_min: int = Field(..., ge=1, le=1440)
    tags: List[str] = Field(default_factory=list)
    active: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("name must not be blank")
        return cleaned


class HabitUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: Optional[HabitCategory] = None
    priority: Optional[HabitPriority] = None
    frequency: Optional[FrequencyPayload] = None
    duration_min: Optional[int] = Field(default=None, ge=1, le=1440)
    tags: Optional[List[str]] = None
    active: Optional[bool] = None


class HabitResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    description: Optional[str]
    category: str
    priority: str
    frequency: FrequencyPayload
    duration_min: int
    tags: List[str]
    active: bool
    created_at: datetime
    updated_at: datetime


class CompletionCreateRequest(BaseModel):
    user_id: UUID
    completed_at: Optional[datetime] = None
    scheduled_for: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class CompletionResponse(BaseModel):
    id: UUID
    habit_id: UUID
    user_id: UUID
    completed_at: datetime
    scheduled_for: Optional[datetime]
    notes: Optional[str]
