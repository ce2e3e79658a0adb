from __future__ import annotations

import logging
import random
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from datetime import datetime

from app.services.date_generator import (
    DEFAULT_END_YEAR,
    DEFAULT_START_YEAR,
    CalendarDate,
    random_valid_date,
)
from app.services.doomsday_engine import DateResolution, resolve_date

logger = logging.getLogger(__name__)

PRACTICE_MODES = ("practice", "speed")


class PracticeActionError(ValueError):
    pass


class PracticeSessionNotFoundError(LookupError):
    pass


@dataclass
class PracticeSession:
    session_id: str
    mode: str
    question: CalendarDate
    question_started_at: datetime | None = None
    selected_weekday: int | None = None
    show_answer: bool = False
    show_hint: bool = False
    streak: int = 0
    best_streak: int = 0
    total_correct: int = 0
    total_attempts: int = 0
    times: list[float] = field(default_factory=list)

    @property
    def resolution(self) -> DateResolution:
        return resolve_date(self.question.month, self.question.day, self.question.year)

    @property
    def correct_weekday(self) -> int:
        return self.resolution.weekday

    @property
    def answered_correctly(self) -> bool | None:
        if not self.show_answer:
            return None
        return self.selected_weekday == self.correct_weekday

    @property
    def accuracy_percent(self) -> int:
        if self.total_attempts == 0:
            return 0
        return round(self.total_correct / self.total_attempts * 100)

    @property
    def average_time(self) -> float | None:
        if not self.times:
            return None
        return sum(self.times) / len(self.times)

    @property
    def best_time(self) -> float | None:
        if not self.times:
            return None
        return min(self.times)


@dataclass(frozen=True)
class GuessOutcome:
    correct: bool
    selected_weekday: int
    correct_weekday: int
    elapsed_seconds: float | None


class PracticeStore:
    """In-process registry of practice sessions; nothing survives a restart."""

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        session_limit: int = 500,
        start_year: int = DEFAULT_START_YEAR,
        end_year: int = DEFAULT_END_YEAR,
    ) -> None:
        if session_limit < 1:
            raise ValueError("session_limit must be at least 1")
        if start_year > end_year:
            raise ValueError(f"start_year {start_year} is after end_year {end_year}")
        self.rng = rng if rng is not None else random.Random()
        self.session_limit = session_limit
        self.start_year = start_year
        self.end_year = end_year
        self.lock = threading.Lock()
        self._sessions: OrderedDict[str, PracticeSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def draw_date(self) -> CalendarDate:
        return random_valid_date(self.start_year, self.end_year, rng=self.rng)

    def add(self, session: PracticeSession) -> None:
        self._sessions[session.session_id] = session
        while len(self._sessions) > self.session_limit:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("Practice session evicted session_id=%s", evicted_id)

    def get(self, session_id: str) -> PracticeSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise PracticeSessionNotFoundError(f"Practice session {session_id} not found")
        return session


def create_practice_session(store: PracticeStore, *, mode: str, now: datetime) -> PracticeSession:
    if mode not in PRACTICE_MODES:
        raise PracticeActionError(f"Unsupported practice mode: {mode}")
    with store.lock:
        session = PracticeSession(
            session_id=uuid.uuid4().hex,
            mode=mode,
            question=store.draw_date(),
            question_started_at=now if mode == "speed" else None,
        )
        store.add(session)
    logger.info("Practice session created session_id=%s mode=%s", session.session_id, mode)
    return session


def submit_guess(store: PracticeStore, *, session_id: str, weekday: int, now: datetime) -> GuessOutcome:
    if not 0 <= weekday <= 6:
        raise PracticeActionError(f"Weekday must be between 0 and 6, got {weekday}")
    with store.lock:
        session = store.get(session_id)
        if session.show_answer:
            raise PracticeActionError("Question already answered; move to the next question")

        correct_weekday = session.correct_weekday
        session.selected_weekday = weekday
        session.show_answer = True
        session.show_hint = False
        session.total_attempts += 1

        correct = weekday == correct_weekday
        elapsed: float | None = None
        if correct:
            session.total_correct += 1
            session.streak += 1
            session.best_streak = max(session.best_streak, session.streak)
            if session.mode == "speed" and session.question_started_at is not None:
                elapsed = (now - session.question_started_at).total_seconds()
                session.times.append(elapsed)
        else:
            session.streak = 0

    logger.info(
        "Practice guess recorded session_id=%s guessed=%s correct_weekday=%s correct=%s streak=%s",
        session_id,
        weekday,
        correct_weekday,
        correct,
        session.streak,
    )
    return GuessOutcome(
        correct=correct,
        selected_weekday=weekday,
        correct_weekday=correct_weekday,
        elapsed_seconds=elapsed,
    )


def next_question(store: PracticeStore, *, session_id: str, now: datetime) -> PracticeSession:
    with store.lock:
        session = store.get(session_id)
        session.question = store.draw_date()
        session.selected_weekday = None
        session.show_answer = False
        session.show_hint = False
        if session.mode == "speed":
            session.question_started_at = now
    return session


def toggle_hint(store: PracticeStore, *, session_id: str) -> PracticeSession:
    with store.lock:
        session = store.get(session_id)
        if session.mode != "practice":
            raise PracticeActionError("Hints are only available in practice mode")
        if session.show_answer:
            raise PracticeActionError("Hints are hidden once the answer is shown")
        session.show_hint = not session.show_hint
    return session


def switch_mode(store: PracticeStore, *, session_id: str, mode: str, now: datetime) -> PracticeSession:
    """Move an existing session to another mode, keeping its score.

    Entering speed mode starts a fresh set of timings.
    """
    if mode not in PRACTICE_MODES:
        raise PracticeActionError(f"Unsupported practice mode: {mode}")
    with store.lock:
        session = store.get(session_id)
        previous_mode = session.mode
        session.mode = mode
        session.question = store.draw_date()
        session.selected_weekday = None
        session.show_answer = False
        session.show_hint = False
        session.question_started_at = now if mode == "speed" else None
        if mode == "speed":
            session.times = []
    logger.info(
        "Practice session mode switched session_id=%s from=%s to=%s streak=%s",
        session_id,
        previous_mode,
        mode,
        session.streak,
    )
    return session


def snapshot_practice_session(store: PracticeStore, session_id: str) -> PracticeSession:
    """Copy of the session taken under the store lock, safe to read after release."""
    with store.lock:
        session = store.get(session_id)
        return replace(session, times=list(session.times))
