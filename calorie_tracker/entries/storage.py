# -*- coding: utf-8 -*-
"""Entries — single JSON file storage.

The file holds the whole snapshot ``{"entries": {"YYYY-MM-DD": [...]}}`` and is
rewritten in full on every save. Each request borrows a fresh copy through
``EntryStore.session()``; nothing is cached between requests.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError as PydanticValidationError

from ..errors import StoreCorruptedError, StoreWriteError
from .models import EntrySnapshot
from .repository import Collection, EntryRepository

logger = logging.getLogger(__name__)


class EntryStore:
    def __init__(self, data_file: Path) -> None:
        self.data_file = Path(data_file)
        self._lock = threading.Lock()

    def ensure_initialized(self) -> None:
        if self.data_file.exists():
            return
        logger.info("Creating empty entry store at %s", self.data_file)
        self.save({})

    def load(self) -> Collection:
        """Read the full collection.

        A missing file is initialized empty on disk. An unreadable or malformed file
        raises StoreCorruptedError and is left untouched.
        """
        try:
            raw = self.data_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("Entry store %s missing, initializing", self.data_file)
            self.save({})
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read entry store %s: %s", self.data_file, exc)
            raise StoreCorruptedError(f"Failed to read data file: {exc}") from exc

        try:
            snapshot = EntrySnapshot.model_validate(json.loads(raw))
        except (ValueError, PydanticValidationError) as exc:
            logger.error("Entry store %s is corrupted: %s", self.data_file, exc)
            raise StoreCorruptedError() from exc
        return snapshot.entries

    def save(self, collection: Collection) -> None:
        """Replace the file content atomically (temp file + fsync + rename)."""
        payload = EntrySnapshot(entries=collection).model_dump(mode="json")
        directory = self.data_file.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=str(directory), prefix=f".{self.data_file.name}.", suffix=".tmp")
        except OSError as exc:
            logger.error("Failed to prepare entry store %s: %s", self.data_file, exc)
            raise StoreWriteError(f"Failed to save data: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.data_file)
        except OSError as exc:
            if os.path.exists(tmp):
                os.remove(tmp)
            logger.error("Failed to write entry store %s: %s", self.data_file, exc)
            raise StoreWriteError(f"Failed to save data: {exc}") from exc

    @contextmanager
    def session(self, *, write: bool = False) -> Iterator[EntryRepository]:
        """Serialize one load-(modify-save) cycle.

        With ``write=True`` the collection is saved when the block exits normally;
        a block that raises persists nothing.
        """
        with self._lock:
            repo = EntryRepository(self.load())
            yield repo
            if write:
                self.save(repo.collection)
