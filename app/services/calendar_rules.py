from __future__ import annotations

from dataclasses import dataclass


WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_COMMON_YEAR_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class InvalidDateError(ValueError):
    pass


@dataclass(frozen=True)
class MonthDoomsday:
    month: int
    day: int
    mnemonic: str


# Common-year reference days; January and February shift by one in leap years.
MONTH_DOOMSDAYS: tuple[MonthDoomsday, ...] = (
    MonthDoomsday(month=1, day=3, mnemonic="1/3 (or 1/4 in leap year)"),
    MonthDoomsday(month=2, day=28, mnemonic="2/28 (or 2/29 in leap year)"),
    MonthDoomsday(month=3, day=14, mnemonic="3/14 (Pi Day)"),
    MonthDoomsday(month=4, day=4, mnemonic="4/4"),
    MonthDoomsday(month=5, day=9, mnemonic="5/9 (I work 9-5 at 7-11)"),
    MonthDoomsday(month=6, day=6, mnemonic="6/6"),
    MonthDoomsday(month=7, day=11, mnemonic="7/11 (I work 9-5 at 7-11)"),
    MonthDoomsday(month=8, day=8, mnemonic="8/8"),
    MonthDoomsday(month=9, day=5, mnemonic="9/5 (I work 9-5 at 7-11)"),
    MonthDoomsday(month=10, day=10, mnemonic="10/10"),
    MonthDoomsday(month=11, day=7, mnemonic="11/7 (I work 9-5 at 7-11)"),
    MonthDoomsday(month=12, day=12, mnemonic="12/12"),
)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def _require_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Month must be between 1 and 12, got {month}")


def days_in_month(month: int, year: int) -> int:
    _require_month(month)
    if month == 2 and is_leap_year(year):
        return 29
    return _COMMON_YEAR_MONTH_LENGTHS[month - 1]


def validate_date(month: int, day: int, year: int) -> None:
    """Raise InvalidDateError unless (month, day) exists in the given year."""
    _require_month(month)
    last_day = days_in_month(month, year)
    if not 1 <= day <= last_day:
        raise InvalidDateError(
            f"Day must be between 1 and {last_day} for {MONTH_NAMES[month - 1]} {year}, got {day}"
        )


def month_doomsday_entry(month: int) -> MonthDoomsday:
    _require_month(month)
    return MONTH_DOOMSDAYS[month - 1]


def month_doomsday_date(month: int, year: int) -> int:
    entry = month_doomsday_entry(month)
    if month in {1, 2} and is_leap_year(year):
        return entry.day + 1
    return entry.day
