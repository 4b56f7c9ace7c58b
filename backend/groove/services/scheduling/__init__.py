"""Habit scheduling core: recurrence, availability, allocation and generation."""
from groove.services.scheduling.allocator import SlotAllocator, allocate_day
from groove.services.scheduling.availability import free_slots, parse_work_hours
from groove.services.scheduling.base import (
    HabitSpec,
    RecurrenceRule,
    ScheduledEvent,
    ScheduleUser,
    TimeSlot,
    WorkWindow,
)
from groove.services.scheduling.generator import generate_schedule
from groove.services.scheduling.recurrence import is_due

__all__ = [
    "HabitSpec",
    "RecurrenceRule",
    "ScheduleUser",
    "ScheduledEvent",
    "SlotAllocator",
    "TimeSlot",
    "WorkWindow",
    "allocate_day",
    "free_slots",
    "generate_schedule",
    "is_due",
    "parse_work_hours",
]
