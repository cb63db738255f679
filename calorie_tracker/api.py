# -*- coding: utf-8 -*-
"""
Calorie Tracker API

Daily food/calorie log served as JSON under /api, with the static front end on every other path.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .entries.api import router as entries_router
from .entries.storage import EntryStore
from .errors import CalorieTrackerError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Calorie Tracker",
    description="Single-user daily calorie log backed by a JSON file",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _internal_error_guard(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.exception_handler(CalorieTrackerError)
async def _tracker_error(request: Request, exc: CalorieTrackerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


# Create the data file at import time so it exists even when lifespan events are not triggered.
entry_store = EntryStore(settings.data_file)
entry_store.ensure_initialized()
app.state.entry_store = entry_store

app.include_router(entries_router)

# Static front end; must be mounted after the API routes.
if settings.public_dir.exists():
    app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
else:
    logger.warning("Public directory %s not found; front end disabled", settings.public_dir)


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    uvicorn.run(
        "calorie_tracker.api:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        reload=False,
    )


if __name__ == "__main__":
    run()
