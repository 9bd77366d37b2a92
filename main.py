# main.py
"""
FastAPI application for the Bhairav Dynamics site.

Run locally with:

    python main.py
    # or
    uvicorn main:create_app --factory --port 3000
"""

import asyncio
import contextlib
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import router
from config import Settings
from db import PrimaryStore
from errors import SubmissionError
from middleware import RateLimitMiddleware, RequestLogMiddleware
from repository import SubmissionStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_store(settings: Settings) -> SubmissionStore:
    """Primary handle + file fallback. A bad URL or missing driver means file-only."""
    try:
        primary = PrimaryStore(settings.database_url, settings.db_connect_timeout)
    except (SQLAlchemyError, ImportError) as e:
        logger.warning("Primary store disabled, using local JSON only: %s", e)
        primary = None
    return SubmissionStore(settings.data_dir, primary)


async def _watch_primary(primary: PrimaryStore, interval: int) -> None:
    while True:
        await asyncio.sleep(interval)
        await run_in_threadpool(primary.ping)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: SubmissionStore = app.state.store
    settings: Settings = app.state.settings

    watcher = None
    if store.primary is not None:
        await run_in_threadpool(store.primary.connect)
        if settings.db_reconnect_interval > 0:
            watcher = asyncio.create_task(_watch_primary(store.primary, settings.db_reconnect_interval))

    yield

    if watcher is not None:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher
    if store.primary is not None:
        store.primary.disconnect()


def create_app(settings: Optional[Settings] = None, store: Optional[SubmissionStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    os.makedirs(settings.data_dir, exist_ok=True)
    os.makedirs(settings.uploads_dir, exist_ok=True)

    app = FastAPI(
        title="Bhairav Dynamics Site API",
        description="Contact and opportunity form submissions.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else build_store(settings)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window,
    )
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(router)

    # ------------------ error mapping ------------------
    @app.exception_handler(SubmissionError)
    async def submission_error_handler(request: Request, exc: SubmissionError):
        if exc.status_code < 500:
            logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if request.url.path.startswith("/api/") and exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
