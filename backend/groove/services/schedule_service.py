"""Assemble a user's schedule and calendar feed from stored records."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Tuple
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.orm import Session

from groove.core.config import settings
from groove.db.models.user import User
from groove.services.calendar_feed import feed_filename, feed_title, render_calendar
from groove.services.habit_service import list_active_habits, list_user_completions, to_habit_spec
from groove.services.scheduling import ScheduledEvent, ScheduleUser, generate_schedule, parse_work_hours
from groove.services.user_service import get_user

logger = logging.getLogger(__name__)


class ScheduleWindowError(ValueError):
    """Raised when a requested schedule range is longer than the feed window."""


@dataclass
class UserSchedule:
    user: User
    window: Tuple[date, date]
    events: List[ScheduledEvent]


@dataclass
class CalendarFeed:
    filename: str
    body: str
    event_count: int


def local_today(timezone_label: str, now: Optional[datetime] = None) -> date:
    """Today's date on the user's wall clock; unknown zones fall back to UTC."""
    try:
        zone = ZoneInfo(timezone_label)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC for today's date", timezone_label)
        zone = timezone.utc
    return (now or datetime.now(timezone.utc)).astimezone(zone).date()


def max_window_days() -> int:
    """Longest range, in days counted inclusively, that one request may generate."""
    return settings.feed_window_days + 1


def feed_window(today: date, days: Optional[int] = None) -> Tuple[date, date]:
    """``today`` through ``days`` days ahead, inclusive, stopping at ``date.max``."""
    span = settings.feed_window_days if days is None else days
    if (date.max - today).days < span:
        return today, date.max
    return today, today + timedelta(days=span)


def resolve_window(start: Optional[date], end: Optional[date], today: date) -> Tuple[date, date]:
    """
    Fill in missing bounds and enforce the size limit.

    A missing start is ``today``; a missing end is the feed window after the
    start. Inverted ranges pass through and produce an empty schedule.
    """
    start = start or today
    end = end or feed_window(start)[1]
    if start <= end and (end - start).days + 1 > max_window_days():
        raise ScheduleWindowError(f"Schedule range may cover at most {max_window_days()} days")
    return start, end


def to_schedule_user(user: User) -> ScheduleUser:
    return ScheduleUser(
        id=str(user.id),
        name=user.name,
        timezone=user.timezone or "UTC",
        work_hours=parse_work_hours(user.work_hours),
    )


def build_user_schedule(
    db: Session,
    user_id: UUID,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> UserSchedule:
    """
    Generate events for a user's active habits over ``start``..``end``.

    Missing bounds default to the feed window starting on the user's local
    today. Raises ValueError when the user does not exist and
    ScheduleWindowError when the range is too long.
    """
    user = get_user(db, user_id)
    window = resolve_window(start, end, today or local_today(user.timezone or "UTC"))

    habits = [to_habit_spec(habit) for habit in list_active_habits(db, user_id)]
    completions = list_user_completions(db, user_id)
    events = generate_schedule(
        to_schedule_user(user),
        habits,
        window[0],
        window[1],
        completions=completions,
    )
    logger.info(
        "Scheduled %s events for user %s (%s habits, %s..%s)",
        len(events),
        user_id,
        len(habits),
        window[0].isoformat(),
        window[1].isoformat(),
    )
    return UserSchedule(user=user, window=window, events=events)


def build_calendar_feed(db: Session, user_id: UUID, today: Optional[date] = None) -> CalendarFeed:
    """Render the subscribable feed for a user over the configured window."""
    schedule = build_user_schedule(db, user_id, today=today)
    user = schedule.user
    body = render_calendar(schedule.events, feed_title(user.name), user.timezone or "UTC")
    return CalendarFeed(
        filename=feed_filename(user.name),
        body=body,
        event_count=len(schedule.events),
    )
