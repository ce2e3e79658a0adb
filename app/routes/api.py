from __future__ import annotations

import random
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from app.services.calendar_rules import (
    MONTH_DOOMSDAYS,
    InvalidDateError,
    is_leap_year,
    month_doomsday_date,
    month_doomsday_entry,
)
from app.services.date_generator import random_valid_date
from app.services.doomsday_engine import (
    CENTURY_ANCHORS,
    century_anchor,
    century_of,
    is_tabulated_century,
    resolve_date,
    year_doomsday,
)
from app.services.formatting import explain_resolution, format_date, hint_lines, weekday_name
from app.services.lessons_service import LESSON_COUNT, Lesson, get_lesson
from app.services.practice_service import (
    PracticeActionError,
    PracticeSession,
    PracticeSessionNotFoundError,
    PracticeStore,
    create_practice_session,
    next_question,
    snapshot_practice_session,
    submit_guess,
    switch_mode,
    toggle_hint,
)
from app.state import get_practice_store, get_random_date_rng, settings

api_router = APIRouter(tags=["api"])

YEAR_MIN = 1
YEAR_MAX = 9999


class PracticeSessionCreateRequest(BaseModel):
    mode: str = "practice"


class GuessRequest(BaseModel):
    weekday: int = Field(ge=0, le=6)


class YearDoomsdayResponse(BaseModel):
    year: int
    weekday: int
    weekday_name: str
    trace: list[str]


class DayOfWeekResponse(BaseModel):
    month: int
    day: int
    year: int
    label: str
    weekday: int
    weekday_name: str
    year_doomsday: int
    month_doomsday_date: int
    raw_offset: int
    normalized_offset: int
    trace: list[str]
    explanation: list[str]


def _serialize_lesson(lesson: Lesson) -> dict[str, object]:
    return {
        "step": lesson.step,
        "lesson_count": LESSON_COUNT,
        "title": lesson.title,
        "intro": lesson.intro,
        "rows": [{"label": row.label, "value": row.value} for row in lesson.rows],
        "method_steps": list(lesson.method_steps),
        "example_title": lesson.example_title,
        "example_lines": list(lesson.example_lines),
        "tip": lesson.tip,
    }


def _serialize_practice_session(session: PracticeSession) -> dict[str, object]:
    question = session.question
    payload: dict[str, object] = {
        "session_id": session.session_id,
        "mode": session.mode,
        "question": {
            "month": question.month,
            "day": question.day,
            "year": question.year,
            "label": format_date(question.month, question.day, question.year),
        },
        "show_answer": session.show_answer,
        "show_hint": session.show_hint,
        "selected_weekday": session.selected_weekday,
        "stats": {
            "streak": session.streak,
            "best_streak": session.best_streak,
            "total_correct": session.total_correct,
            "total_attempts": session.total_attempts,
            "accuracy_percent": session.accuracy_percent,
        },
    }
    if session.mode == "speed":
        payload["speed"] = {
            "solved": len(session.times),
            "average_seconds": None if session.average_time is None else round(session.average_time, 1),
            "best_seconds": None if session.best_time is None else round(session.best_time, 1),
        }
    if session.show_hint:
        payload["hint"] = hint_lines(session.resolution)
    if session.show_answer:
        resolution = session.resolution
        payload["answer"] = {
            "correct": session.answered_correctly,
            "weekday": resolution.weekday,
            "weekday_name": weekday_name(resolution.weekday),
            "explanation": explain_resolution(resolution),
        }
    return payload


@api_router.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}


@api_router.get("/leap-year/{year}")
def leap_year_api(year: int) -> dict[str, object]:
    return {"year": year, "is_leap_year": is_leap_year(year)}


@api_router.get("/century-anchors")
def century_anchors_api() -> list[dict[str, object]]:
    return [
        {"century": century, "anchor": anchor, "weekday_name": weekday_name(anchor)}
        for century, anchor in sorted(CENTURY_ANCHORS.items())
    ]


@api_router.get("/century-anchor/{year}")
def century_anchor_api(year: int) -> dict[str, object]:
    anchor = century_anchor(year)
    return {
        "year": year,
        "century": century_of(year),
        "anchor": anchor,
        "weekday_name": weekday_name(anchor),
        "tabulated": is_tabulated_century(year),
    }


@api_router.get("/year-doomsday/{year}", response_model=YearDoomsdayResponse)
def year_doomsday_api(year: int) -> YearDoomsdayResponse:
    result = year_doomsday(year)
    return YearDoomsdayResponse(
        year=result.year,
        weekday=result.weekday,
        weekday_name=weekday_name(result.weekday),
        trace=list(result.trace),
    )


@api_router.get("/month-doomsdays")
def month_doomsdays_api(year: int = Query(default=2000)) -> list[dict[str, object]]:
    return [
        {
            "month": entry.month,
            "year": year,
            "day": month_doomsday_date(entry.month, year),
            "mnemonic": entry.mnemonic,
        }
        for entry in MONTH_DOOMSDAYS
    ]


@api_router.get("/month-doomsday")
def month_doomsday_api(
    month: int = Query(ge=1, le=12),
    year: int = Query(),
) -> dict[str, object]:
    return {
        "month": month,
        "year": year,
        "day": month_doomsday_date(month, year),
        "mnemonic": month_doomsday_entry(month).mnemonic,
    }


@api_router.get("/day-of-week", response_model=DayOfWeekResponse)
def day_of_week_api(
    month: int = Query(),
    day: int = Query(),
    year: int = Query(ge=YEAR_MIN, le=YEAR_MAX),
) -> DayOfWeekResponse:
    try:
        resolution = resolve_date(month, day, year)
    except InvalidDateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return DayOfWeekResponse(
        month=resolution.month,
        day=resolution.day,
        year=resolution.year,
        label=format_date(resolution.month, resolution.day, resolution.year),
        weekday=resolution.weekday,
        weekday_name=weekday_name(resolution.weekday),
        year_doomsday=resolution.year_doomsday,
        month_doomsday_date=resolution.month_doomsday_date,
        raw_offset=resolution.raw_offset,
        normalized_offset=resolution.normalized_offset,
        trace=list(resolution.trace),
        explanation=explain_resolution(resolution),
    )


@api_router.get("/random-date")
def random_date_api(
    start_year: int | None = Query(default=None, ge=YEAR_MIN, le=YEAR_MAX),
    end_year: int | None = Query(default=None, ge=YEAR_MIN, le=YEAR_MAX),
    rng: random.Random = Depends(get_random_date_rng),
) -> dict[str, object]:
    try:
        drawn = random_valid_date(
            settings.default_start_year if start_year is None else start_year,
            settings.default_end_year if end_year is None else end_year,
            rng=rng,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "month": drawn.month,
        "day": drawn.day,
        "year": drawn.year,
        "label": format_date(drawn.month, drawn.day, drawn.year),
    }


@api_router.get("/lessons/{step}")
def lesson_api(step: int) -> dict[str, object]:
    try:
        lesson = get_lesson(step)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _serialize_lesson(lesson)


def _serialize_snapshot(store: PracticeStore, session_id: str) -> dict[str, object]:
    try:
        session = snapshot_practice_session(store, session_id)
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _serialize_practice_session(session)


@api_router.post("/practice/sessions", status_code=201)
def practice_session_create(
    payload: PracticeSessionCreateRequest,
    store: PracticeStore = Depends(get_practice_store),
) -> dict[str, object]:
    try:
        session = create_practice_session(store, mode=payload.mode, now=datetime.now())
    except PracticeActionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_snapshot(store, session.session_id)


@api_router.get("/practice/sessions/{session_id}")
def practice_session_get(
    session_id: str,
    store: PracticeStore = Depends(get_practice_store),
) -> dict[str, object]:
    return _serialize_snapshot(store, session_id)


@api_router.post("/practice/sessions/{session_id}/guess")
def practice_session_guess(
    session_id: str,
    payload: GuessRequest,
    store: PracticeStore = Depends(get_practice_store),
) -> dict[str, object]:
    try:
        outcome = submit_guess(store, session_id=session_id, weekday=payload.weekday, now=datetime.now())
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PracticeActionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "correct": outcome.correct,
        "selected_weekday": outcome.selected_weekday,
        "correct_weekday": outcome.correct_weekday,
        "elapsed_seconds": outcome.elapsed_seconds,
        "session": _serialize_snapshot(store, session_id),
    }


@api_router.post("/practice/sessions/{session_id}/next")
def practice_session_next(
    session_id: str,
    store: PracticeStore = Depends(get_practice_store),
) -> dict[str, object]:
    try:
        next_question(store, session_id=session_id, now=datetime.now())
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _serialize_snapshot(store, session_id)


@api_router.post("/practice/sessions/{session_id}/mode")
def practice_session_mode(
    session_id: str,
    payload: PracticeSessionCreateRequest,
    store: PracticeStore = Depends(get_practice_store),
) -> dict[str, object]:
    try:
        switch_mode(store, session_id=session_id, mode=payload.mode, now=datetime.now())
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PracticeActionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_snapshot(store, session_id)


@api_router.post("/practice/sessions/{session_id}/hint")
def practice_session_hint(
    session_id: str,
    store: PracticeStore = Depends(get_practice_store),
) -> dict[str, object]:
    try:
        toggle_hint(store, session_id=session_id)
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PracticeActionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _serialize_snapshot(store, session_id)
