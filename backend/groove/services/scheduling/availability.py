"""Derive a day's free windows from the user's work hours."""
from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Mapping, Optional

from groove.services.scheduling.base import WEEKDAY_NAMES, TimeSlot, WorkWindow
from groove.services.scheduling.recurrence import sunday_weekday

logger = logging.getLogger(__name__)

DAY_START = time(6, 0)
DAY_END = time(22, 0)
LUNCH_START = time(12, 0)
LUNCH_END = time(13, 0)


def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` 24-hour string."""
    hours, _, minutes = value.partition(":")
    return time(int(hours), int(minutes or 0))


def at(day: date, clock: time | str) -> datetime:
    """Combine a date with a wall-clock time."""
    if isinstance(clock, str):
        clock = parse_clock(clock)
    return datetime.combine(day, clock)


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[sunday_weekday(day)]


def parse_work_hours(raw: Optional[Mapping[str, Any]]) -> Dict[str, Optional[WorkWindow]]:
    """
    Convert stored work hours into WorkWindow values.

    ``raw`` is the JSON shape persisted on the user record, e.g.
    ``{"monday": {"start": "09:00", "end": "17:00"}, "sunday": None}``.
    Days that are missing or null mean no work that day. Entries were
    validated when they were saved, so malformed ones are skipped with a
    warning rather than rejected here.
    """
    windows: Dict[str, Optional[WorkWindow]] = {}
    for name in WEEKDAY_NAMES:
        entry = (raw or {}).get(name)
        if not entry:
            windows[name] = None
            continue
        try:
            windows[name] = WorkWindow(start=parse_clock(entry["start"]), end=parse_clock(entry["end"]))
        except (KeyError, TypeError, ValueError):
            logger.warning("Ignoring malformed work hours for %s: %r", name, entry)
            windows[name] = None
    return windows


def free_slots(work_hours: Optional[Mapping[str, Optional[WorkWindow]]], day: date) -> List[TimeSlot]:
    """
    Return the free windows of ``day`` in chronological order.

    Everything is bounded to [06:00, 22:00). Without work hours for the
    weekday the whole bound is free. Otherwise the free time is the morning
    before work, a lunch hour when work spans 12:00-13:00, and the evening
    after work.
    """
    bound_start = at(day, DAY_START)
    bound_end = at(day, DAY_END)

    window = (work_hours or {}).get(weekday_name(day))
    if window is None:
        return [TimeSlot(start=bound_start, end=bound_end)]

    work_start = at(day, window.start)
    work_end = at(day, window.end)
    candidates: List[TimeSlot] = []

    if work_start > bound_start:
        candidates.append(TimeSlot(start=bound_start, end=min(work_start, bound_end)))

    lunch_start = at(day, LUNCH_START)
    lunch_end = at(day, LUNCH_END)
    if work_start <= lunch_start and work_end >= lunch_end:
        candidates.append(TimeSlot(start=lunch_start, end=lunch_end))

    if work_end < bound_end:
        candidates.append(TimeSlot(start=max(work_end, bound_start), end=bound_end))

    return [slot for slot in candidates if slot.end > slot.start]
