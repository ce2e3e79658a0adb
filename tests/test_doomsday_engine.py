import random
from datetime import date

import pytest

from app.services.calendar_rules import MONTH_DOOMSDAYS, InvalidDateError, month_doomsday_date
from app.services.date_generator import random_valid_date
from app.services.doomsday_engine import (
    CENTURY_ANCHORS,
    century_anchor,
    day_of_week,
    is_tabulated_century,
    resolve_date,
    year_doomsday,
)


def _reference_weekday(month: int, day: int, year: int) -> int:
    return date(year, month, day).isoweekday() % 7


def test_century_anchor_table_entries() -> None:
    assert century_anchor(2050) == 2
    assert century_anchor(1776) == 0
    assert century_anchor(1900) == 3
    assert century_anchor(1899) == 5
    assert century_anchor(2399) == 3


def test_century_anchor_is_constant_within_a_century_and_in_range() -> None:
    for century in range(-800, 3200, 100):
        anchors = {century_anchor(year) for year in range(century, century + 100)}
        assert len(anchors) == 1
        assert anchors.pop() in range(7)


def test_century_anchor_outside_table_follows_400_year_cycle() -> None:
    assert not is_tabulated_century(1500)
    assert century_anchor(1600) == 2
    assert century_anchor(2400) == 2
    assert century_anchor(1500) == 3
    assert century_anchor(2500) == 0
    for century, anchor in CENTURY_ANCHORS.items():
        assert is_tabulated_century(century)
        assert century_anchor(century + 400) == anchor
        assert century_anchor(century - 400) == anchor


def test_year_doomsday_2024_trace() -> None:
    result = year_doomsday(2024)
    assert result.weekday == 4
    assert result.trace == (
        "Century anchor for 2000s: Tuesday (2)",
        "Last two digits: 24",
        "24 is even, keep it: 24",
        "Divide by 2: 12",
        "12 is even, keep it: 12",
        "12 mod 7 = 5",
        "Subtract from anchor: (2 - 5 + 7) mod 7 = 4",
        "Doomsday for 2024: Thursday",
    )


def test_year_doomsday_odd_branches_are_recorded() -> None:
    result = year_doomsday(1969)
    assert result.weekday == 5
    assert result.trace[2] == "69 is odd, add 11: 80"
    assert result.trace[3] == "Divide by 2: 40"
    assert result.trace[4] == "40 is even, keep it: 40"

    assert year_doomsday(2011).trace[4] == "11 is odd, add 11: 22"
    assert year_doomsday(2011).weekday == 1


def test_year_doomsday_trace_shape_is_fixed_and_deterministic() -> None:
    for year in (1, 99, 1582, 1900, 2000, 2024, 2399, 9999):
        first = year_doomsday(year)
        second = year_doomsday(year)
        assert first == second
        assert len(first.trace) == 8
        assert all(step for step in first.trace)


def test_month_doomsday_dates_land_on_year_doomsday() -> None:
    for year in range(1600, 2401, 7):
        doomsday = year_doomsday(year).weekday
        for entry in MONTH_DOOMSDAYS:
            reference = month_doomsday_date(entry.month, year)
            assert _reference_weekday(entry.month, reference, year) == doomsday


def test_day_of_week_moon_landing() -> None:
    resolution = resolve_date(7, 20, 1969)
    assert resolution.year_doomsday == 5
    assert resolution.month_doomsday_date == 11
    assert resolution.raw_offset == 9
    assert resolution.normalized_offset == 2
    assert resolution.weekday == 0
    assert day_of_week(7, 20, 1969) == 0


def test_day_of_week_handles_negative_offsets() -> None:
    resolution = resolve_date(12, 1, 2023)
    assert resolution.raw_offset == -11
    assert resolution.normalized_offset == 3
    assert resolution.weekday == 5  # Friday
    assert day_of_week(1, 1, 2000) == 6
    assert day_of_week(2, 29, 2024) == 4


def test_day_of_week_matches_reference_for_random_dates() -> None:
    rng = random.Random(20240229)
    for _ in range(1000):
        drawn = random_valid_date(1600, 2400, rng=rng)
        assert day_of_week(drawn.month, drawn.day, drawn.year) == _reference_weekday(
            drawn.month, drawn.day, drawn.year
        )


def test_offset_base_choice_is_consistent_mod_7() -> None:
    for year in (1900, 1969, 2000, 2024):
        for entry in MONTH_DOOMSDAYS:
            reference = month_doomsday_date(entry.month, year)
            same_weekday_days = [d for d in range(1, 32) if (d - reference) % 7 == 0]
            valid = [d for d in same_weekday_days if _is_valid(entry.month, d, year)]
            assert {day_of_week(entry.month, d, year) for d in valid} == {year_doomsday(year).weekday}


def _is_valid(month: int, day: int, year: int) -> bool:
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def test_resolve_date_rejects_invalid_dates() -> None:
    with pytest.raises(InvalidDateError):
        resolve_date(2, 30, 2024)
    with pytest.raises(InvalidDateError):
        day_of_week(13, 1, 2024)
    with pytest.raises(InvalidDateError):
        day_of_week(6, 31, 2024)
