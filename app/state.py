from __future__ import annotations

import random

from app.config import get_settings
from app.services.practice_service import PracticeStore

settings = get_settings()


def build_practice_store(seed: int | None = None) -> PracticeStore:
    return PracticeStore(
        rng=random.Random(seed),
        session_limit=settings.practice_session_limit,
        start_year=settings.default_start_year,
        end_year=settings.default_end_year,
    )


practice_store = build_practice_store(settings.random_seed)
random_date_rng = random.Random(settings.random_seed)


def get_practice_store() -> PracticeStore:
    return practice_store


def get_random_date_rng() -> random.Random:
    return random_date_rng
