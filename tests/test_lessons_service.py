import pytest

from app.services.lessons_service import LESSON_COUNT, clamp_step, get_lesson


def test_century_anchor_lesson_lists_table() -> None:
    lesson = get_lesson(0)
    assert lesson.title == "Step 1: Century Anchors"
    assert [(row.label, row.value) for row in lesson.rows][:4] == [
        ("1700s", "Sunday"),
        ("1800s", "Friday"),
        ("1900s", "Wednesday"),
        ("2000s", "Tuesday"),
    ]


def test_odd_plus_eleven_lesson_example_is_computed() -> None:
    lesson = get_lesson(1)
    assert len(lesson.method_steps) == 6
    assert lesson.example_title == "Example: 2024"
    assert lesson.example_lines[0] == "Last two digits: 24"
    assert lesson.example_lines[-1] == "Doomsday 2024 is Thursday!"


def test_doomsday_dates_lesson_has_twelve_rows() -> None:
    lesson = get_lesson(2)
    assert len(lesson.rows) == 12
    assert lesson.rows[2].label == "3/14"
    assert lesson.rows[2].value == "3/14 (Pi Day)"


def test_putting_it_together_lesson_uses_moon_landing() -> None:
    lesson = get_lesson(3)
    assert lesson.example_title == "Example: July 20, 1969"
    assert lesson.example_lines[0] == "Doomsday for 1969: Friday"
    assert lesson.example_lines[-1] == "Moon landing was on a Sunday!"


def test_lesson_step_bounds() -> None:
    assert LESSON_COUNT == 4
    assert clamp_step(-3) == 0
    assert clamp_step(10) == 3
    with pytest.raises(ValueError):
        get_lesson(4)
