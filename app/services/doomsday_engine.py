from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from app.services.calendar_rules import WEEKDAY_NAMES, month_doomsday_date, validate_date


CENTURY_ANCHORS = MappingProxyType(
    {
        1700: 0,  # Sunday
        1800: 5,  # Friday
        1900: 3,  # Wednesday
        2000: 2,  # Tuesday
        2100: 0,  # Sunday
        2200: 5,  # Friday
        2300: 3,  # Wednesday
    }
)


@dataclass(frozen=True)
class DoomsdayResult:
    year: int
    weekday: int
    trace: tuple[str, ...]


@dataclass(frozen=True)
class DateResolution:
    month: int
    day: int
    year: int
    year_doomsday: int
    month_doomsday_date: int
    raw_offset: int
    normalized_offset: int
    weekday: int
    trace: tuple[str, ...]


def century_of(year: int) -> int:
    return (year // 100) * 100


def is_tabulated_century(year: int) -> bool:
    return century_of(year) in CENTURY_ANCHORS


def century_anchor(year: int) -> int:
    """Weekday of the doomsday in the year ending in 00 of ``year``'s century.

    Centuries missing from ``CENTURY_ANCHORS`` use the 400-year Gregorian
    cycle (Tue, Sun, Fri, Wed), which agrees with every tabulated entry.
    """
    tabulated = CENTURY_ANCHORS.get(century_of(year))
    if tabulated is not None:
        return tabulated
    return (2 + 5 * ((year // 100) % 4)) % 7


def _odd_plus_eleven_step(value: int) -> tuple[int, str]:
    if value % 2 == 1:
        return value + 11, f"{value} is odd, add 11: {value + 11}"
    return value, f"{value} is even, keep it: {value}"


def year_doomsday(year: int) -> DoomsdayResult:
    """Compute the year's doomsday with the Odd+11 method, recording each step."""
    steps: list[str] = []

    anchor = century_anchor(year)
    steps.append(f"Century anchor for {century_of(year)}s: {WEEKDAY_NAMES[anchor]} ({anchor})")

    yy = year % 100
    steps.append(f"Last two digits: {yy}")

    yy, step = _odd_plus_eleven_step(yy)
    steps.append(step)

    yy = yy // 2
    steps.append(f"Divide by 2: {yy}")

    yy, step = _odd_plus_eleven_step(yy)
    steps.append(step)

    remainder = yy % 7
    steps.append(f"{yy} mod 7 = {remainder}")

    doomsday = ((anchor - remainder) % 7 + 7) % 7
    steps.append(f"Subtract from anchor: ({anchor} - {remainder} + 7) mod 7 = {doomsday}")
    steps.append(f"Doomsday for {year}: {WEEKDAY_NAMES[doomsday]}")

    return DoomsdayResult(year=year, weekday=doomsday, trace=tuple(steps))


def resolve_date(month: int, day: int, year: int) -> DateResolution:
    validate_date(month, day, year)
    doomsday = year_doomsday(year)
    reference_day = month_doomsday_date(month, year)
    raw_offset = day - reference_day
    normalized_offset = ((raw_offset % 7) + 7) % 7
    return DateResolution(
        month=month,
        day=day,
        year=year,
        year_doomsday=doomsday.weekday,
        month_doomsday_date=reference_day,
        raw_offset=raw_offset,
        normalized_offset=normalized_offset,
        weekday=(doomsday.weekday + normalized_offset) % 7,
        trace=doomsday.trace,
    )


def day_of_week(month: int, day: int, year: int) -> int:
    return resolve_date(month, day, year).weekday
