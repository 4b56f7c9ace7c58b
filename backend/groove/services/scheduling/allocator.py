"""Greedy placement of one day's due habits into free time."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from groove.services.scheduling.availability import at
from groove.services.scheduling.base import HabitSpec, ScheduledEvent, TimeSlot

logger = logging.getLogger(__name__)

PREFERRED_TIMES = {
    "activities": ("07:00", "18:00", "19:00"),
    "people": ("19:00", "20:00", "12:00"),
    "responsibilities": ("09:00", "10:00", "14:00"),
}
DEFAULT_PREFERRED_TIMES = ("09:00", "14:00", "19:00")


def preferred_times(category: str) -> Tuple[str, ...]:
    return PREFERRED_TIMES.get(category, DEFAULT_PREFERRED_TIMES)


class SlotAllocator:
    """
    Places habits into the free slots of a single day.

    The allocator owns a private, ordered copy of the slot list. Each
    placement removes the slot it used and puts the leftover time before and
    after the event back at the same position, so later habits only ever see
    time that is still free. Placement is a single greedy pass: a habit that
    has been placed is never moved to make room for another one.
    """

    def __init__(self, day: date, slots: Iterable[TimeSlot]):
        self.day = day
        self._slots: List[TimeSlot] = list(slots)

    @property
    def slots(self) -> Tuple[TimeSlot, ...]:
        return tuple(self._slots)

    def allocate(self, habits: Sequence[HabitSpec]) -> List[ScheduledEvent]:
        """Place habits in the given order, skipping those that do not fit."""
        events: List[ScheduledEvent] = []
        for habit in habits:
            event = self.place(habit)
            if event is None:
                logger.debug(
                    "No free slot for habit %s (%s min) on %s",
                    habit.id,
                    habit.duration_min,
                    self.day.isoformat(),
                )
                continue
            events.append(event)
        return events

    def place(self, habit: HabitSpec) -> Optional[ScheduledEvent]:
        length = timedelta(minutes=habit.duration_min)
        found = self._find_preferred(habit.category, length) or self._find_first_fit(length)
        if found is None:
            return None

        index, start = found
        end = start + length
        self._consume(index, start, end)
        return ScheduledEvent(
            habit_id=habit.id,
            habit_name=habit.name,
            category=habit.category,
            priority=habit.priority,
            start=start,
            end=end,
            duration_min=habit.duration_min,
        )

    def _find_preferred(self, category: str, length: timedelta) -> Optional[Tuple[int, datetime]]:
        for clock in preferred_times(category):
            start = at(self.day, clock)
            for index, slot in enumerate(self._slots):
                if slot.contains(start) and slot.end - start >= length:
                    return index, start
        return None

    def _find_first_fit(self, length: timedelta) -> Optional[Tuple[int, datetime]]:
        for index, slot in enumerate(self._slots):
            if slot.end - slot.start >= length:
                return index, slot.start
        return None

    def _consume(self, index: int, start: datetime, end: datetime) -> None:
        slot = self._slots[index]
        residual: List[TimeSlot] = []
        if start > slot.start:
            residual.append(TimeSlot(start=slot.start, end=start))
        if end < slot.end:
            residual.append(TimeSlot(start=end, end=slot.end))
        self._slots[index:index + 1] = residual


def allocate_day(day: date, habits: Sequence[HabitSpec], slots: Iterable[TimeSlot]) -> List[ScheduledEvent]:
    """Run a fresh allocator for ``day``; the caller's slot list is left untouched."""
    return SlotAllocator(day, slots).allocate(habits)
