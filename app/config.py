from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    default_start_year: int
    default_end_year: int
    random_seed: int | None
    practice_session_limit: int
    app_host: str
    app_port: int


def _optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


def get_settings() -> Settings:
    return Settings(
        default_start_year=int(os.getenv("DEFAULT_START_YEAR", "1900")),
        default_end_year=int(os.getenv("DEFAULT_END_YEAR", "2100")),
        random_seed=_optional_int(os.getenv("RANDOM_SEED")),
        practice_session_limit=int(os.getenv("PRACTICE_SESSION_LIMIT", "500")),
        app_host=os.getenv("APP_HOST", "0.0.0.0"),
        app_port=int(os.getenv("APP_PORT", "8000")),
    )
