"""Schemas for the generated schedule preview."""
from __future__ import annotations

from datetime import date, datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel


class ScheduleWindowPayload(BaseModel):
    start: date
    end: date


class ScheduledEventPayload(BaseModel):
    habit_id: str
    habit_name: str
    category: str
    priority: str
    start: datetime
    end: datetime
    duration_min: int


class SchedulePreviewResponse(BaseModel):
    user_id: UUID
    timezone: str
    window: ScheduleWindowPayload
    events: List[ScheduledEventPayload]
    request_id: str
