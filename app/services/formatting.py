from __future__ import annotations

from app.services.calendar_rules import MONTH_NAMES, WEEKDAY_ABBREVIATIONS, WEEKDAY_NAMES
from app.services.doomsday_engine import DateResolution


def _require_weekday(weekday: int) -> None:
    if not 0 <= weekday <= 6:
        raise ValueError(f"Weekday must be between 0 and 6, got {weekday}")


def weekday_name(weekday: int) -> str:
    _require_weekday(weekday)
    return WEEKDAY_NAMES[weekday]


def weekday_abbreviation(weekday: int) -> str:
    _require_weekday(weekday)
    return WEEKDAY_ABBREVIATIONS[weekday]


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return MONTH_NAMES[month - 1]


def format_date(month: int, day: int, year: int) -> str:
    return f"{month_name(month)} {day}, {year}"


def format_short_date(month: int, day: int) -> str:
    return f"{month}/{day}"


def plural_days(count: int) -> str:
    return "day" if abs(count) == 1 else "days"


def explain_resolution(resolution: DateResolution) -> list[str]:
    """Full worked solution: year trace, then the month offset arithmetic."""
    lines = list(resolution.trace)
    lines.append(f"Month doomsday: {month_name(resolution.month)} {resolution.month_doomsday_date}")
    lines.append(
        f"Offset from month doomsday: {resolution.day} - {resolution.month_doomsday_date}"
        f" = {resolution.raw_offset} {plural_days(resolution.raw_offset)}"
    )
    lines.append(f"Offset mod 7: {resolution.raw_offset} mod 7 = {resolution.normalized_offset}")
    lines.append(
        f"Final day: Start from {weekday_name(resolution.year_doomsday)} and move "
        f"{resolution.normalized_offset} {plural_days(resolution.normalized_offset)} forward"
        f" -> {weekday_name(resolution.weekday)}"
    )
    return lines


def hint_lines(resolution: DateResolution) -> list[str]:
    header = f"Doomsday for {format_short_date(resolution.month, resolution.month_doomsday_date)}"
    return [header, *resolution.trace]
