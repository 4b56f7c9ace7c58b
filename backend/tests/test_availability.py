"""Tests for free-slot construction."""
from __future__ import annotations

from datetime import date, datetime, time, timedelta

from groove.services.scheduling.availability import free_slots, parse_clock, parse_work_hours
from groove.services.scheduling.base import WorkWindow

MONDAY = date(2026, 1, 5)
SUNDAY = date(2026, 1, 4)


def _spans(slots) -> list[tuple[str, str]]:
    return [(slot.start.strftime("%H:%M"), slot.end.strftime("%H:%M")) for slot in slots]


def _monday(start: str, end: str) -> dict:
    return parse_work_hours({"monday": {"start": start, "end": end}})


def test_parse_clock() -> None:
    assert parse_clock("09:30") == time(9, 30)
    assert parse_clock("00:00") == time(0, 0)


def test_no_work_hours_gives_full_day() -> None:
    for offset in range(7):
        day = SUNDAY + timedelta(days=offset)
        slots = free_slots(None, day)
        assert len(slots) == 1
        assert slots[0].start == datetime(day.year, day.month, day.day, 6, 0)
        assert slots[0].end == datetime(day.year, day.month, day.day, 22, 0)


def test_day_without_entry_gives_full_day() -> None:
    work_hours = _monday("09:00", "17:00")

    assert _spans(free_slots(work_hours, SUNDAY)) == [("06:00", "22:00")]


def test_nine_to_five_gives_morning_lunch_evening() -> None:
    work_hours = _monday("09:00", "17:00")

    assert _spans(free_slots(work_hours, MONDAY)) == [
        ("06:00", "09:00"),
        ("12:00", "13:00"),
        ("17:00", "22:00"),
    ]


def test_work_covering_whole_bound_leaves_only_lunch() -> None:
    assert _spans(free_slots(_monday("06:00", "22:00"), MONDAY)) == [("12:00", "13:00")]


def test_no_lunch_when_work_starts_after_noon() -> None:
    assert _spans(free_slots(_monday("13:00", "18:00"), MONDAY)) == [("06:00", "13:00"), ("18:00", "22:00")]


def test_early_shift_has_no_morning_slot() -> None:
    assert _spans(free_slots(_monday("05:00", "11:00"), MONDAY)) == [("11:00", "22:00")]


def test_slots_stay_within_bound() -> None:
    night_shift = _monday("23:00", "23:30")
    assert _spans(free_slots(night_shift, MONDAY)) == [("06:00", "22:00")]

    small_hours = _monday("01:00", "04:00")
    assert _spans(free_slots(small_hours, MONDAY)) == [("06:00", "22:00")]


def test_slots_never_overlap() -> None:
    for start, end in [("07:30", "16:00"), ("10:00", "12:30"), ("12:00", "13:00"), ("08:00", "21:00")]:
        slots = free_slots(_monday(start, end), MONDAY)
        for earlier, later in zip(slots, slots[1:]):
            assert earlier.end <= later.start
        assert all(slot.end > slot.start for slot in slots)


def test_parse_work_hours_fills_every_weekday() -> None:
    parsed = parse_work_hours({"friday": {"start": "10:00", "end": "15:00"}, "sunday": None})

    assert set(parsed) == {"sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"}
    assert parsed["friday"] == WorkWindow(start=time(10, 0), end=time(15, 0))
    assert parsed["sunday"] is None
    assert parsed["monday"] is None


def test_parse_work_hours_skips_malformed_entries() -> None:
    parsed = parse_work_hours({"monday": {"start": "09:00"}, "tuesday": "nope"})

    assert parsed["monday"] is None
    assert parsed["tuesday"] is None
