"""Expand habits into concrete events over a date range."""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from groove.services.scheduling.allocator import allocate_day
from groove.services.scheduling.availability import free_slots
from groove.services.scheduling.base import HabitSpec, ScheduledEvent, ScheduleUser
from groove.services.scheduling.recurrence import is_due

logger = logging.getLogger(__name__)

PRIORITY_RANK = {"high": 3, "medium": 2, "low": 1}


def sort_by_priority(habits: Iterable[HabitSpec]) -> List[HabitSpec]:
    """High priority first; equal priorities keep their incoming order."""
    return sorted(habits, key=lambda habit: PRIORITY_RANK.get(habit.priority, 0), reverse=True)


def generate_schedule(
    user: ScheduleUser,
    habits: Sequence[HabitSpec],
    start_date: date,
    end_date: date,
    completions: Optional[Sequence[object]] = None,
) -> List[ScheduledEvent]:
    """
    Build the event list for every day from ``start_date`` to ``end_date`` inclusive.

    Each day gets its own free-slot list, so nothing carries over between
    days. Events come out day by day, in allocation order within a day.
    ``completions`` is accepted for callers that already have completion
    history at hand but does not influence placement.
    """
    active = [habit for habit in habits if habit.active]
    events: List[ScheduledEvent] = []
    if not active or start_date > end_date:
        return events

    for offset in range((end_date - start_date).days + 1):
        current = start_date + timedelta(days=offset)
        due = sort_by_priority(habit for habit in active if is_due(habit.rule, current, start_date))
        if due:
            slots = free_slots(user.work_hours, current)
            events.extend(allocate_day(current, due, slots))

    logger.debug(
        "Generated %s events for %s active habits over %s..%s (%s completions supplied)",
        len(events),
        len(active),
        start_date.isoformat(),
        end_date.isoformat(),
        len(completions or ()),
    )
    return events
