from __future__ import annotations

from dataclasses import dataclass

from app.services.calendar_rules import MONTH_DOOMSDAYS
from app.services.doomsday_engine import CENTURY_ANCHORS, resolve_date, year_doomsday
from app.services.formatting import (
    explain_resolution,
    format_date,
    format_short_date,
    weekday_name,
)


LESSON_COUNT = 4

ODD_PLUS_ELEVEN_EXAMPLE_YEAR = 2024
MOON_LANDING = (7, 20, 1969)


@dataclass(frozen=True)
class LessonRow:
    label: str
    value: str


@dataclass(frozen=True)
class Lesson:
    step: int
    title: str
    intro: str
    rows: tuple[LessonRow, ...] = ()
    method_steps: tuple[str, ...] = ()
    example_title: str | None = None
    example_lines: tuple[str, ...] = ()
    tip: str | None = None


def clamp_step(step: int) -> int:
    return max(0, min(step, LESSON_COUNT - 1))


def _century_anchors_lesson() -> Lesson:
    return Lesson(
        step=0,
        title="Step 1: Century Anchors",
        intro='Each century has an "anchor" day that all Doomsdays in that century are based on:',
        rows=tuple(
            LessonRow(label=f"{century}s", value=weekday_name(anchor))
            for century, anchor in sorted(CENTURY_ANCHORS.items())
        ),
        tip='Mnemonic: "We-in-dis-day" -> Wed (1900s), Tue (2000s), Sun (2100s)',
    )


def _odd_plus_eleven_lesson() -> Lesson:
    result = year_doomsday(ODD_PLUS_ELEVEN_EXAMPLE_YEAR)
    return Lesson(
        step=1,
        title="Step 2: The Odd+11 Method",
        intro="To find which day Doomsday falls on for any year:",
        method_steps=(
            "Take the last two digits of the year",
            "If odd, add 11",
            "Divide by 2",
            "If odd, add 11",
            "Find remainder when divided by 7",
            "Subtract from century anchor (mod 7)",
        ),
        example_title=f"Example: {ODD_PLUS_ELEVEN_EXAMPLE_YEAR}",
        example_lines=(
            *result.trace[1:],
            f"Doomsday {ODD_PLUS_ELEVEN_EXAMPLE_YEAR} is {weekday_name(result.weekday)}!",
        ),
    )


def _doomsday_dates_lesson() -> Lesson:
    return Lesson(
        step=2,
        title="Step 3: Doomsday Dates",
        intro="These dates ALWAYS fall on Doomsday (the same day of the week):",
        rows=tuple(
            LessonRow(label=format_short_date(entry.month, entry.day), value=entry.mnemonic)
            for entry in MONTH_DOOMSDAYS
        ),
        tip='Tip: "I work 9-5 at 7-11" helps remember May 9, Sept 5, July 11, Nov 7',
    )


def _putting_it_together_lesson() -> Lesson:
    month, day, year = MOON_LANDING
    resolution = resolve_date(month, day, year)
    return Lesson(
        step=3,
        title="Step 4: Putting It Together",
        intro="To find the day of week for any date:",
        method_steps=(
            "Find the Doomsday for that year (Odd+11)",
            "Find the nearest Doomsday date in that month",
            "Count forward/backward from that Doomsday",
        ),
        example_title=f"Example: {format_date(month, day, year)}",
        example_lines=(
            *explain_resolution(resolution)[len(resolution.trace) - 1 :],
            f"Moon landing was on a {weekday_name(resolution.weekday)}!",
        ),
    )


_LESSON_BUILDERS = (
    _century_anchors_lesson,
    _odd_plus_eleven_lesson,
    _doomsday_dates_lesson,
    _putting_it_together_lesson,
)


def get_lesson(step: int) -> Lesson:
    if not 0 <= step < LESSON_COUNT:
        raise ValueError(f"Lesson step must be between 0 and {LESSON_COUNT - 1}, got {step}")
    return _LESSON_BUILDERS[step]()
