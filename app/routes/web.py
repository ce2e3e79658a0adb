from __future__ import annotations

from datetime import datetime
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from app.services.calendar_rules import WEEKDAY_ABBREVIATIONS, WEEKDAY_NAMES
from app.services.formatting import explain_resolution, format_date, hint_lines, weekday_name
from app.services.lessons_service import LESSON_COUNT, clamp_step, get_lesson
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
from app.state import get_practice_store

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))
web_router = APIRouter(tags=["web"])
logger = logging.getLogger(__name__)

PRACTICE_SESSION_COOKIE = "practice_session_id"


def _format_seconds(value: float | None) -> str:
    return "—" if value is None else f"{value:.1f}"


def _day_button_state(session: PracticeSession, weekday: int) -> str:
    if not session.show_answer:
        return ""
    if session.selected_weekday == weekday:
        return "correct" if weekday == session.correct_weekday else "incorrect"
    return "correct" if weekday == session.correct_weekday else ""


def _build_practice_context(
    session: PracticeSession,
    *,
    action_error: str | None = None,
) -> dict[str, object]:
    resolution = session.resolution
    question = session.question
    return {
        "mode": session.mode,
        "session": session,
        "date_label": format_date(question.month, question.day, question.year),
        "day_buttons": [
            {
                "weekday": index,
                "name": WEEKDAY_NAMES[index],
                "abbreviation": WEEKDAY_ABBREVIATIONS[index],
                "state": _day_button_state(session, index),
            }
            for index in range(7)
        ],
        "hint": hint_lines(resolution) if session.show_hint else [],
        "explanation": explain_resolution(resolution) if session.show_answer else [],
        "correct_weekday_name": weekday_name(resolution.weekday),
        "average_time": _format_seconds(session.average_time),
        "best_time": _format_seconds(session.best_time),
        "action_error": action_error,
    }


def _render_practice_page(request: Request, session: PracticeSession, **context_overrides):
    return templates.TemplateResponse(
        request,
        "practice.html",
        _build_practice_context(session, **context_overrides),
    )


def _load_session(store: PracticeStore, session_id: str) -> PracticeSession:
    try:
        return snapshot_practice_session(store, session_id)
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _enter_mode_redirect(request: Request, store: PracticeStore, mode: str) -> RedirectResponse:
    now = datetime.now()
    existing_id = request.cookies.get(PRACTICE_SESSION_COOKIE)
    session: PracticeSession | None = None
    if existing_id:
        try:
            session = switch_mode(store, session_id=existing_id, mode=mode, now=now)
        except PracticeSessionNotFoundError:
            logger.info("Practice session cookie expired session_id=%s", existing_id)
    if session is None:
        session = create_practice_session(store, mode=mode, now=now)
    response = RedirectResponse(url=f"/practice/{session.session_id}", status_code=303)
    response.set_cookie(PRACTICE_SESSION_COOKIE, session.session_id, httponly=True, samesite="lax")
    return response


@web_router.get("/")
def root_redirect() -> RedirectResponse:
    return RedirectResponse(url="/learn", status_code=307)


@web_router.get("/learn")
def learn_page(request: Request, step: int = 0):
    lesson = get_lesson(clamp_step(step))
    return templates.TemplateResponse(
        request,
        "learn.html",
        {
            "mode": "learn",
            "lesson": lesson,
            "lesson_count": LESSON_COUNT,
            "has_previous": lesson.step > 0,
            "has_next": lesson.step < LESSON_COUNT - 1,
        },
    )


@web_router.get("/practice")
def practice_start(request: Request, store: PracticeStore = Depends(get_practice_store)) -> RedirectResponse:
    return _enter_mode_redirect(request, store, "practice")


@web_router.get("/speed")
def speed_start(request: Request, store: PracticeStore = Depends(get_practice_store)) -> RedirectResponse:
    return _enter_mode_redirect(request, store, "speed")


@web_router.get("/practice/{session_id}")
def practice_page(request: Request, session_id: str, store: PracticeStore = Depends(get_practice_store)):
    return _render_practice_page(request, _load_session(store, session_id))


@web_router.post("/practice/{session_id}/guess")
def practice_guess(
    request: Request,
    session_id: str,
    weekday: int = Form(...),
    store: PracticeStore = Depends(get_practice_store),
):
    try:
        submit_guess(store, session_id=session_id, weekday=weekday, now=datetime.now())
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PracticeActionError as exc:
        logger.info("Practice guess rejected session_id=%s reason=%s", session_id, exc)
        return _render_practice_page(request, _load_session(store, session_id), action_error=str(exc))
    return RedirectResponse(url=f"/practice/{session_id}", status_code=303)


@web_router.post("/practice/{session_id}/next")
def practice_next(session_id: str, store: PracticeStore = Depends(get_practice_store)) -> RedirectResponse:
    try:
        next_question(store, session_id=session_id, now=datetime.now())
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return RedirectResponse(url=f"/practice/{session_id}", status_code=303)


@web_router.post("/practice/{session_id}/hint")
def practice_hint(request: Request, session_id: str, store: PracticeStore = Depends(get_practice_store)):
    try:
        toggle_hint(store, session_id=session_id)
    except PracticeSessionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PracticeActionError as exc:
        return _render_practice_page(request, _load_session(store, session_id), action_error=str(exc))
    return RedirectResponse(url=f"/practice/{session_id}", status_code=303)
