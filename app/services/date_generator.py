from __future__ import annotations

import random
from dataclasses import dataclass

from app.services.calendar_rules import days_in_month


DEFAULT_START_YEAR = 1900
DEFAULT_END_YEAR = 2100


@dataclass(frozen=True)
class CalendarDate:
    month: int
    day: int
    year: int


def random_valid_date(
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
    *,
    rng: random.Random | None = None,
) -> CalendarDate:
    """Sample year, then month, then a day that exists in that month.

    Without ``rng`` the process-wide ``random`` module is used, so
    ``random.seed`` makes the sequence reproducible.
    """
    if start_year > end_year:
        raise ValueError(f"start_year {start_year} is after end_year {end_year}")
    source = rng if rng is not None else random
    year = source.randint(start_year, end_year)
    month = source.randint(1, 12)
    day = source.randint(1, days_in_month(month, year))
    return CalendarDate(month=month, day=day, year=year)
