from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from app.logging_config import (
    REQUEST_ID_HEADER,
    configure_logging,
    new_request_id,
    reset_request_id,
    set_request_id,
)
from app.routes.api import api_router
from app.routes.web import web_router
from app.state import settings

configure_logging()
logger = logging.getLogger(__name__)


def _app_mode() -> str:
    mode = os.getenv("APP_MODE", "all").strip().lower()
    if mode not in {"all", "api", "web"}:
        return "all"
    return mode


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting Doomsday Trainer default_year_range=%s-%s seeded=%s",
        settings.default_start_year,
        settings.default_end_year,
        settings.random_seed is not None,
    )
    yield
    logger.info("Shutting down Doomsday Trainer")


def create_app() -> FastAPI:
    app = FastAPI(title="Doomsday Trainer", version="0.1.0", lifespan=lifespan)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = new_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    static_dir = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

    mode = _app_mode()
    if mode in {"all", "web"}:
        app.include_router(web_router)
    if mode in {"all", "api"}:
        app.include_router(api_router, prefix="/api")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.app_host, port=settings.app_port)
