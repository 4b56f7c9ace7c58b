"""Value types shared by the scheduling core.

These are snapshots decoupled from the ORM: the core reads them and never
writes back, so a generation run cannot leak changes into stored habits.
All datetimes are naive local wall-clock values in the user's timezone.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Dict, FrozenSet, Optional

# Sunday-first, matching the 0=Sunday..6=Saturday weekday numbers used by rules.
WEEKDAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


@dataclass(frozen=True)
class RecurrenceRule:
    type: str
    interval: int = 1
    weekdays: Optional[FrozenSet[int]] = None


@dataclass(frozen=True)
class HabitSpec:
    id: str
    name: str
    category: str
    priority: str
    duration_min: int
    rule: RecurrenceRule
    active: bool = True


@dataclass(frozen=True)
class WorkWindow:
    start: time
    end: time


@dataclass(frozen=True)
class ScheduleUser:
    name: str
    timezone: str
    work_hours: Dict[str, Optional[WorkWindow]] = field(default_factory=dict)
    id: Optional[str] = None


@dataclass(frozen=True)
class TimeSlot:
    """A free window on one calendar day."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class ScheduledEvent:
    habit_id: str
    habit_name: str
    category: str
    priority: str
    start: datetime
    end: datetime
    duration_min: int
