import pytest

from app.services.calendar_rules import (
    MONTH_DOOMSDAYS,
    InvalidDateError,
    days_in_month,
    is_leap_year,
    month_doomsday_date,
    validate_date,
)


def test_leap_year_gregorian_boundaries() -> None:
    assert is_leap_year(1900) is False
    assert is_leap_year(2000) is True
    assert is_leap_year(2024) is True
    assert is_leap_year(2023) is False
    assert is_leap_year(2100) is False
    assert is_leap_year(1600) is True


def test_leap_year_is_proleptic_for_non_positive_years() -> None:
    assert is_leap_year(0) is True
    assert is_leap_year(-4) is True
    assert is_leap_year(-100) is False
    assert is_leap_year(-1) is False


def test_days_in_month_uses_leap_rule_for_february() -> None:
    assert days_in_month(2, 2000) == 29
    assert days_in_month(2, 1900) == 28
    assert days_in_month(4, 2023) == 30
    assert days_in_month(12, 2023) == 31
    assert sum(days_in_month(month, 2023) for month in range(1, 13)) == 365
    assert sum(days_in_month(month, 2024) for month in range(1, 13)) == 366


def test_month_doomsday_date_adjusts_january_and_february_in_leap_years() -> None:
    assert month_doomsday_date(2, 2024) == 29
    assert month_doomsday_date(2, 2023) == 28
    assert month_doomsday_date(1, 2024) == 4
    assert month_doomsday_date(1, 2023) == 3
    assert month_doomsday_date(3, 2024) == 14
    assert [entry.day for entry in MONTH_DOOMSDAYS[2:]] == [14, 4, 9, 6, 11, 8, 5, 10, 7, 12]


def test_invalid_month_and_day_raise_invalid_date_error() -> None:
    with pytest.raises(InvalidDateError):
        days_in_month(13, 2024)
    with pytest.raises(InvalidDateError):
        month_doomsday_date(0, 2024)
    with pytest.raises(InvalidDateError):
        validate_date(2, 29, 2023)
    with pytest.raises(InvalidDateError):
        validate_date(4, 0, 2023)
    validate_date(2, 29, 2024)
    assert issubclass(InvalidDateError, ValueError)
