"""Tests for multi-day schedule generation."""
from __future__ import annotations

from datetime import date, datetime

from groove.services.scheduling import (
    HabitSpec,
    RecurrenceRule,
    ScheduleUser,
    generate_schedule,
    parse_work_hours,
)
from groove.services.scheduling.generator import sort_by_priority

MONDAY = date(2026, 1, 5)
SUNDAY = date(2026, 1, 11)

USER = ScheduleUser(
    name="Alex",
    timezone="America/New_York",
    work_hours=parse_work_hours(
        {day: {"start": "09:00", "end": "17:00"} for day in ("monday", "tuesday", "wednesday", "thursday", "friday")}
    ),
)


def _habit(habit_id: str, *, category: str = "activities", priority: str = "medium", duration: int = 30,
           rule: RecurrenceRule = RecurrenceRule(type="daily"), active: bool = True) -> HabitSpec:
    return HabitSpec(
        id=habit_id,
        name=habit_id.title(),
        category=category,
        priority=priority,
        duration_min=duration,
        rule=rule,
        active=active,
    )


def test_no_habits_yields_no_events() -> None:
    assert generate_schedule(USER, [], MONDAY, SUNDAY) == []


def test_inverted_range_yields_no_events() -> None:
    assert generate_schedule(USER, [_habit("run")], SUNDAY, MONDAY) == []


def test_single_day_range() -> None:
    events = generate_schedule(USER, [_habit("run")], MONDAY, MONDAY)

    assert len(events) == 1
    assert events[0].start == datetime(2026, 1, 5, 7, 0)


def test_daily_habit_once_per_day_inclusive() -> None:
    events = generate_schedule(USER, [_habit("run")], MONDAY, SUNDAY)

    assert [event.start.date() for event in events] == [date(2026, 1, day) for day in range(5, 12)]


def test_inactive_habits_are_ignored() -> None:
    events = generate_schedule(USER, [_habit("run", active=False)], MONDAY, SUNDAY)

    assert events == []


def test_weekly_rule_anchored_to_range_start() -> None:
    rule = RecurrenceRule(type="weekly", interval=1, weekdays=frozenset({1, 3}))

    events = generate_schedule(USER, [_habit("swim", rule=rule)], MONDAY, SUNDAY)

    assert [event.start.date() for event in events] == [date(2026, 1, 5), date(2026, 1, 7)]


def test_high_priority_gets_contested_preferred_time() -> None:
    low = _habit("stretch", priority="low")
    high = _habit("run", priority="high")

    events = generate_schedule(USER, [low, high], MONDAY, MONDAY)

    assert [event.habit_id for event in events] == ["run", "stretch"]
    assert events[0].start == datetime(2026, 1, 5, 7, 0)
    assert events[1].start == datetime(2026, 1, 5, 18, 0)


def test_equal_priority_keeps_input_order() -> None:
    habits = [_habit("b"), _habit("a"), _habit("c", priority="high")]

    assert [habit.id for habit in sort_by_priority(habits)] == ["c", "b", "a"]


def test_events_are_day_major() -> None:
    habits = [_habit("run", priority="high"), _habit("call", category="people")]

    events = generate_schedule(USER, habits, MONDAY, date(2026, 1, 7))

    days = [event.start.date() for event in events]
    assert days == sorted(days)
    assert [event.habit_id for event in events[:2]] == ["run", "call"]


def test_each_day_starts_with_fresh_slots() -> None:
    # The habit fills 06:00-22:00, so day two only fits if its slots are new.
    habits = [_habit("deep", category="responsibilities", duration=960)]

    events = generate_schedule(USER, habits, date(2026, 1, 10), date(2026, 1, 11))

    assert len(events) == 2


def test_completions_do_not_change_placement() -> None:
    habits = [_habit("run")]

    with_history = generate_schedule(USER, habits, MONDAY, SUNDAY, completions=[object(), object()])
    without = generate_schedule(USER, habits, MONDAY, SUNDAY)

    assert with_history == without


def test_generation_is_deterministic() -> None:
    habits = [_habit("run", priority="high"), _habit("call", category="people", duration=60), _habit("tax", category="responsibilities")]

    assert generate_schedule(USER, habits, MONDAY, SUNDAY) == generate_schedule(USER, habits, MONDAY, SUNDAY)


def test_range_ending_on_last_representable_day() -> None:
    events = generate_schedule(USER, [_habit("run")], date.max, date.max)

    assert len(events) == 1
    assert events[0].start == datetime(9999, 12, 31, 7, 0)


def test_long_habit_on_last_representable_day_is_skipped_quietly() -> None:
    events = generate_schedule(USER, [_habit("marathon", duration=1440)], date.max, date.max)

    assert events == []
