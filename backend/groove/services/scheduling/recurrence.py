"""Decide whether a habit's recurrence rule makes it due on a given date."""
from __future__ import annotations

from calendar import monthrange
from datetime import date

from groove.services.scheduling.base import RecurrenceRule


def sunday_weekday(day: date) -> int:
    """Weekday number with 0=Sunday..6=Saturday."""
    return day.isoweekday() % 7


def is_due(rule: RecurrenceRule, candidate: date, anchor: date) -> bool:
    """
    Return True when ``rule`` schedules the habit on ``candidate``.

    All arithmetic is relative to ``anchor``, the first day of the generation
    window, so the answer depends only on the three arguments. ``candidate``
    is expected to be on or after ``anchor``. Unknown rule types are never due.
    """
    interval = max(int(rule.interval or 1), 1)
    elapsed_days = (candidate - anchor).days

    if rule.type in ("daily", "custom"):
        # custom has no richer semantics yet; it repeats every `interval` days.
        return elapsed_days % interval == 0

    if rule.type == "weekly":
        if not rule.weekdays or sunday_weekday(candidate) not in rule.weekdays:
            return False
        return (elapsed_days // 7) % interval == 0

    if rule.type == "monthly":
        days_in_month = monthrange(candidate.year, candidate.month)[1]
        if candidate.day != min(anchor.day, days_in_month):
            return False
        elapsed_months = (candidate.year - anchor.year) * 12 + (candidate.month - anchor.month)
        return elapsed_months % interval == 0

    return False
