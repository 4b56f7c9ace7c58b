"""Tests for the iCalendar renderer."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from groove.services.calendar_feed import (
    escape_text,
    event_uid,
    feed_filename,
    feed_title,
    random_suffix,
    render_calendar,
)
from groove.services.scheduling.base import ScheduledEvent

NOW = datetime(2026, 1, 1, 12, 30, 0, tzinfo=timezone.utc)


def _event(habit_id: str = "h1", name: str = "Morning Run", category: str = "activities",
           priority: str = "high", start_hour: int = 7) -> ScheduledEvent:
    return ScheduledEvent(
        habit_id=habit_id,
        habit_name=name,
        category=category,
        priority=priority,
        start=datetime(2026, 1, 5, start_hour, 0),
        end=datetime(2026, 1, 5, start_hour, 30),
        duration_min=30,
    )


def _render(events, name: str = "Alex's Groove Habits", tz: str = "America/New_York") -> str:
    return render_calendar(events, name, tz, now=NOW, uid_suffix=lambda: "abc1234")


def test_escape_order() -> None:
    assert escape_text("a\\b;c,d\ne") == "a\\\\b\\;c\\,d\\ne"
    assert escape_text("line\r\nnext") == "line\\nnext"
    assert escape_text("plain") == "plain"
    assert escape_text("A;B,C\nD") == "A\\;B\\,C\\nD"


def test_empty_feed_has_header_and_footer_only() -> None:
    body = _render([])

    assert body.split("\r\n") == [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Groove Habit Tracker//EN",
        "X-WR-CALNAME:Alex's Groove Habits",
        "X-WR-TIMEZONE:America/New_York",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VTIMEZONE",
        "TZID:America/New_York",
        "END:VTIMEZONE",
        "END:VCALENDAR",
    ]


def test_event_block_lines() -> None:
    lines = _render([_event()]).split("\r\n")
    start = lines.index("BEGIN:VEVENT")

    assert lines[start:start + 16] == [
        "BEGIN:VEVENT",
        "UID:h1-1767596400000-abc1234@groove.app",
        "DTSTAMP:20260101T123000Z",
        "DTSTART;TZID=America/New_York:20260105T070000",
        "DTEND;TZID=America/New_York:20260105T073000",
        "SUMMARY:Morning Run",
        "DESCRIPTION:Category: activities\\nPriority: high\\nDuration: 30 minutes",
        "CATEGORIES:ACTIVITIES",
        "PRIORITY:1",
        "COLOR:#2196F3",
        "BEGIN:VALARM",
        "ACTION:DISPLAY",
        "DESCRIPTION:Morning Run starting soon",
        "TRIGGER:-PT5M",
        "END:VALARM",
        "END:VEVENT",
    ]
    assert lines[-1] == "END:VCALENDAR"


def test_lines_are_crlf_terminated() -> None:
    body = _render([_event(), _event(habit_id="h2", start_hour=18)])

    assert "\n" not in body.replace("\r\n", "")
    assert not body.endswith("\r\n")
    assert body.count("BEGIN:VEVENT") == 2


def test_summary_is_escaped() -> None:
    body = _render([_event(name="Read, write; repeat")])

    assert "SUMMARY:Read\\, write\\; repeat" in body
    assert "DESCRIPTION:Read\\, write\\; repeat starting soon" in body


def test_priority_and_color_mapping() -> None:
    body = _render([
        _event(habit_id="a", category="people", priority="medium"),
        _event(habit_id="b", category="responsibilities", priority="low", start_hour=9),
        _event(habit_id="c", category="hobbies", priority="medium", start_hour=19),
    ])

    assert "COLOR:#4CAF50" in body
    assert "COLOR:#FF9800" in body
    assert "COLOR:#9C27B0" in body
    assert "PRIORITY:5" in body
    assert "PRIORITY:9" in body
    assert "CATEGORIES:HOBBIES" in body


def test_rendering_is_repeatable_with_pinned_inputs() -> None:
    events = [_event(), _event(habit_id="h2", category="people", start_hour=19)]

    assert _render(events) == _render(events)


def test_uid_suffixes_differ_between_renders_by_default() -> None:
    first = render_calendar([_event()], "Feed", "UTC", now=NOW)
    second = render_calendar([_event()], "Feed", "UTC", now=NOW)

    uid_first = next(line for line in first.split("\r\n") if line.startswith("UID:"))
    uid_second = next(line for line in second.split("\r\n") if line.startswith("UID:"))
    assert uid_first.startswith("UID:h1-1767596400000-")
    assert uid_first.endswith("@groove.app")
    assert uid_first != uid_second


def test_random_suffix_is_base36() -> None:
    suffix = random_suffix()

    assert len(suffix) == 7
    assert set(suffix) <= set("0123456789abcdefghijklmnopqrstuvwxyz")


def test_event_uid_custom_domain() -> None:
    assert event_uid(_event(), "zzz0000", domain="example.org") == "h1-1767596400000-zzz0000@example.org"


def test_dtstamp_converts_aware_time_to_utc() -> None:
    offset_now = datetime(2026, 1, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))

    body = render_calendar([_event()], "Feed", "UTC", now=offset_now, uid_suffix=lambda: "x")

    assert "DTSTAMP:20260101T123000Z" in body


def test_feed_title_and_filename() -> None:
    assert feed_title("Alex") == "Alex's Groove Habits"
    assert feed_filename("Alex Kim") == "Alex-Kim-groove-habits.ics"
    assert feed_filename("Ana  Maria\tLopez") == "Ana-Maria-Lopez-groove-habits.ics"
