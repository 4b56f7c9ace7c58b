"""Render scheduled habit events as an iCalendar (RFC 5545) feed."""
from __future__ import annotations

import re
import secrets
import string
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from groove.core.config import settings
from groove.services.scheduling.base import ScheduledEvent

CRLF = "\r\n"

ICAL_PRIORITY = {"high": 1, "medium": 5, "low": 9}

CATEGORY_COLORS = {
    "people": "#4CAF50",
    "activities": "#2196F3",
    "responsibilities": "#FF9800",
}
DEFAULT_COLOR = "#9C27B0"

_BASE36 = string.digits + string.ascii_lowercase
_WHITESPACE = re.compile(r"\s+")


def escape_text(value: str) -> str:
    """Escape free text for TEXT properties.

    Backslashes go first so the escapes added afterwards are not escaped again.
    """
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
        .replace("\r", "")
    )


def format_local(value: datetime) -> str:
    """``YYYYMMDDTHHMMSS`` for a wall-clock value used with a TZID parameter."""
    return value.strftime("%Y%m%dT%H%M%S")


def format_utc(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y%m%dT%H%M%SZ")


def random_suffix(length: int = 7) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def _epoch_millis(value: datetime) -> int:
    # Naive wall-clock values are read as UTC so the number does not depend on the host timezone.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def event_uid(event: ScheduledEvent, suffix: str, domain: Optional[str] = None) -> str:
    return f"{event.habit_id}-{_epoch_millis(event.start)}-{suffix}@{domain or settings.feed_uid_domain}"


def feed_title(user_name: str) -> str:
    return f"{user_name}'s Groove Habits"


def feed_filename(user_name: str) -> str:
    return f"{_WHITESPACE.sub('-', user_name)}-groove-habits.ics"


def _event_lines(
    event: ScheduledEvent,
    timezone_label: str,
    stamp: str,
    suffix: str,
) -> List[str]:
    description = (
        f"Category: {event.category}\n"
        f"Priority: {event.priority}\n"
        f"Duration: {event.duration_min} minutes"
    )
    return [
        "BEGIN:VEVENT",
        f"UID:{event_uid(event, suffix)}",
        f"DTSTAMP:{stamp}",
        f"DTSTART;TZID={timezone_label}:{format_local(event.start)}",
        f"DTEND;TZID={timezone_label}:{format_local(event.end)}",
        f"SUMMARY:{escape_text(event.habit_name)}",
        f"DESCRIPTION:{escape_text(description)}",
        f"CATEGORIES:{event.category.upper()}",
        f"PRIORITY:{ICAL_PRIORITY.get(event.priority, 5)}",
        f"COLOR:{CATEGORY_COLORS.get(event.category, DEFAULT_COLOR)}",
        "BEGIN:VALARM",
        "ACTION:DISPLAY",
        f"DESCRIPTION:{escape_text(event.habit_name)} starting soon",
        "TRIGGER:-PT5M",
        "END:VALARM",
        "END:VEVENT",
    ]


def render_calendar(
    events: Iterable[ScheduledEvent],
    calendar_name: str,
    timezone_label: str,
    *,
    now: Optional[datetime] = None,
    uid_suffix: Callable[[], str] = random_suffix,
) -> str:
    """
    Render ``events`` as a VCALENDAR document joined with CRLF.

    ``now`` (DTSTAMP) and ``uid_suffix`` are the only inputs that vary between
    calls; pin them to get byte-identical output for the same events.
    The VTIMEZONE block only names the zone; clients resolve the offsets.
    """
    stamp = format_utc(now or datetime.now(timezone.utc))
    lines: List[str] = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{settings.feed_product_id}",
        f"X-WR-CALNAME:{calendar_name}",
        f"X-WR-TIMEZONE:{timezone_label}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VTIMEZONE",
        f"TZID:{timezone_label}",
        "END:VTIMEZONE",
    ]
    for event in events:
        lines.extend(_event_lines(event, timezone_label, stamp, uid_suffix()))
    lines.append("END:VCALENDAR")
    return CRLF.join(lines)
