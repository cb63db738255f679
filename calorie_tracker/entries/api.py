# -*- coding: utf-8 -*-
"""Entries — API endpoints."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from ..errors import EntryNotFoundError, MalformedBodyError, NotFoundError
from .models import DailyTotal, Entry, ErrorResponse
from .repository import utc_now, utc_today
from .storage import EntryStore
from .validation import validate_day, validate_new_entry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Entries"])

_DATE_QUERY_DESCRIPTION = "YYYY-MM-DD (UTC); defaults to today"


def get_entry_store(request: Request) -> EntryStore:
    return request.app.state.entry_store


async def read_json_object(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise MalformedBodyError() from exc
    if not isinstance(payload, dict):
        raise MalformedBodyError("Request body must be a JSON object")
    return payload


def _resolve_day(value: Optional[str]) -> str:
    return validate_day(value) or utc_today()


@router.get("/entries", response_model=List[Entry], summary="List entries for a day")
def list_entries(
    day: Optional[str] = Query(default=None, alias="date", description=_DATE_QUERY_DESCRIPTION),
    store: EntryStore = Depends(get_entry_store),
):
    target = _resolve_day(day)
    with store.session() as repo:
        return repo.list_for_date(target)


@router.get("/total", response_model=DailyTotal, summary="Calorie total for a day")
def day_total(
    day: Optional[str] = Query(default=None, alias="date", description=_DATE_QUERY_DESCRIPTION),
    store: EntryStore = Depends(get_entry_store),
):
    target = _resolve_day(day)
    with store.session() as repo:
        return DailyTotal(total=repo.total_for_date(target))


@router.post(
    "/entries",
    response_model=Entry,
    status_code=201,
    summary="Log a food entry for today",
    responses={400: {"model": ErrorResponse}},
)
def create_entry(
    payload: Dict[str, Any] = Depends(read_json_object),
    store: EntryStore = Depends(get_entry_store),
):
    name, calories = validate_new_entry(payload)
    now = utc_now()
    with store.session(write=True) as repo:
        entry = repo.create(now.date().isoformat(), name, calories, now=now)
    logger.info("Created entry %s (%s, %s kcal)", entry.id, entry.name, entry.calories)
    return entry


@router.delete(
    "/entries/{entry_id}",
    status_code=204,
    response_class=Response,
    summary="Delete one entry by id",
    responses={404: {"model": ErrorResponse}},
)
def delete_entry(entry_id: str, store: EntryStore = Depends(get_entry_store)):
    with store.session(write=True) as repo:
        if not repo.delete_by_id(entry_id):
            raise EntryNotFoundError()
    logger.info("Deleted entry %s", entry_id)
    return Response(status_code=204)


@router.delete("/entries", status_code=204, response_class=Response, summary="Clear all entries of a day")
def clear_entries(
    day: Optional[str] = Query(default=None, alias="date", description=_DATE_QUERY_DESCRIPTION),
    store: EntryStore = Depends(get_entry_store),
):
    target = _resolve_day(day)
    with store.session(write=True) as repo:
        repo.clear_date(target)
    logger.info("Cleared entries for %s", target)
    return Response(status_code=204)


@router.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
def api_not_found(path: str):  # noqa: ARG001
    raise NotFoundError()
