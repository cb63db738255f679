# -*- coding: utf-8 -*-
"""Entries — in-memory operations over a loaded collection.

A repository wraps the ``{day: [Entry, ...]}`` mapping borrowed from the store
for the duration of one request. Days are UTC calendar dates (YYYY-MM-DD).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from ..errors import InternalError
from .models import Calories, Entry

Collection = Dict[str, List[Entry]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> str:
    return utc_now().date().isoformat()


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class EntryRepository:
    def __init__(self, collection: Optional[Collection] = None) -> None:
        self.collection: Collection = collection if collection is not None else {}

    def list_for_date(self, day: str) -> List[Entry]:
        return list(self.collection.get(day, []))

    def total_for_date(self, day: str) -> Calories:
        return sum((entry.calories for entry in self.collection.get(day, [])), 0)

    def create(self, day: str, name: str, calories: Calories, *, now: Optional[datetime] = None) -> Entry:
        moment = (now or utc_now()).astimezone(timezone.utc)
        if moment.date().isoformat() != day:
            raise InternalError(f"Timestamp {moment.isoformat()} does not fall on {day}")
        entry = Entry(
            id=str(uuid4()),
            name=name,
            calories=calories,
            timestamp=format_timestamp(moment),
        )
        self.collection.setdefault(day, []).append(entry)
        return entry

    def delete_by_id(self, entry_id: str) -> bool:
        for day, entries in self.collection.items():
            for idx, entry in enumerate(entries):
                if entry.id != entry_id:
                    continue
                del entries[idx]
                if not entries:
                    del self.collection[day]
                return True
        return False

    def clear_date(self, day: str) -> None:
        self.collection.pop(day, None)
