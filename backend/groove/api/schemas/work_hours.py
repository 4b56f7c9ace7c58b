"""Schemas for per-weekday work hours."""
from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

CLOCK_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


class DayHours(BaseModel):
    start: str = Field(..., pattern=CLOCK_PATTERN)
    end: str = Field(..., pattern=CLOCK_PATTERN)

    @model_validator(mode="after")
    def start_before_end(self) -> "DayHours":
        # Zero-padded HH:MM strings order the same way as the times they encode.
        if self.start >= self.end:
            raise ValueError("start time must be before end time")
        return self


class WorkHoursPayload(BaseModel):
    monday: Optional[DayHours] = None
    tuesday: Optional[DayHours] = None
    wednesday: Optional[DayHours] = None
    thursday: Optional[DayHours] = None
    friday: Optional[DayHours] = None
    saturday: Optional[DayHours] = None
    sunday: Optional[DayHours] = None


class WorkHoursUpdateRequest(BaseModel):
    work_hours: Optional[WorkHoursPayload]


class WorkHoursResponse(BaseModel):
    user_id: UUID
    work_hours: Optional[WorkHoursPayload]
    request_id: str
