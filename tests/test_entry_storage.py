# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import shutil
import tempfile
import unittest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from unittest import mock

from calorie_tracker.entries.storage import EntryStore
from calorie_tracker.errors import InternalError, StoreCorruptedError, StoreWriteError

DAY = "2024-03-10"
NOON = datetime.fromisoformat(f"{DAY}T12:00:00+00:00")


class TestEntryStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="calorie-tracker-test-"))
        self.data_file = self._tmp / "nested" / "data.json"
        self.store = EntryStore(self.data_file)

    def tearDown(self) -> None:
        shutil.rmtree(self._tmp, ignore_errors=True)

    def _read_file(self) -> dict:
        return json.loads(self.data_file.read_text(encoding="utf-8"))

    def test_load_missing_file_initializes_empty(self) -> None:
        self.assertFalse(self.data_file.exists())
        self.assertEqual(self.store.load(), {})
        self.assertEqual(self._read_file(), {"entries": {}})

    def test_ensure_initialized_does_not_overwrite(self) -> None:
        self.store.ensure_initialized()
        self.assertEqual(self._read_file(), {"entries": {}})

        with self.store.session(write=True) as repo:
            repo.create(DAY, "Apple", 95, now=NOON)
        self.store.ensure_initialized()
        self.assertEqual(len(self._read_file()["entries"][DAY]), 1)

    def test_save_then_load_round_trip(self) -> None:
        with self.store.session(write=True) as repo:
            repo.create(DAY, "Apple", 95, now=NOON)
            repo.create(DAY, "Tea", 2.5, now=NOON)

        first = self.store.load()
        self.store.save(first)
        second = self.store.load()
        self.assertEqual(first, second)
        self.assertIsInstance(second[DAY][0].calories, int)
        self.assertIsInstance(second[DAY][1].calories, float)

    def test_file_layout(self) -> None:
        with self.store.session(write=True) as repo:
            entry = repo.create(DAY, "Mac & Cheese (large)", 800, now=NOON)

        data = self._read_file()
        self.assertEqual(list(data), ["entries"])
        self.assertEqual(
            data["entries"][DAY],
            [
                {
                    "id": entry.id,
                    "name": "Mac & Cheese (large)",
                    "calories": 800,
                    "timestamp": "2024-03-10T12:00:00.000Z",
                }
            ],
        )

    def test_malformed_json_raises_and_keeps_file(self) -> None:
        self.data_file.parent.mkdir(parents=True)
        self.data_file.write_text("{not json", encoding="utf-8")

        with self.assertRaises(StoreCorruptedError) as ctx:
            self.store.load()
        self.assertIsInstance(ctx.exception, InternalError)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(self.data_file.read_text(encoding="utf-8"), "{not json")

    def test_unexpected_shape_raises(self) -> None:
        self.data_file.parent.mkdir(parents=True)
        for content in ("[]", '{"entries": []}', '{"entries": {"2024-03-10": [{"id": "x"}]}}'):
            with self.subTest(content=content):
                self.data_file.write_text(content, encoding="utf-8")
                with self.assertRaises(StoreCorruptedError):
                    self.store.load()
                self.assertEqual(self.data_file.read_text(encoding="utf-8"), content)

    def test_read_only_session_does_not_write(self) -> None:
        self.store.ensure_initialized()
        with mock.patch.object(self.store, "save") as save:
            with self.store.session() as repo:
                repo.create(DAY, "Apple", 95, now=NOON)
        save.assert_not_called()

    def test_failed_session_persists_nothing(self) -> None:
        self.store.ensure_initialized()
        with self.assertRaises(RuntimeError):
            with self.store.session(write=True) as repo:
                repo.create(DAY, "Apple", 95, now=NOON)
                raise RuntimeError("boom")
        self.assertEqual(self._read_file(), {"entries": {}})

    def test_session_can_be_reentered_after_failure(self) -> None:
        with self.assertRaises(RuntimeError):
            with self.store.session(write=True):
                raise RuntimeError("boom")
        with self.store.session(write=True) as repo:
            repo.create(DAY, "Apple", 95, now=NOON)
        self.assertEqual(len(self.store.load()[DAY]), 1)

    def test_concurrent_write_sessions_lose_no_updates(self) -> None:
        self.store.ensure_initialized()

        def add(i: int) -> str:
            with self.store.session(write=True) as repo:
                return repo.create(DAY, f"item {i}", i, now=NOON).id

        with ThreadPoolExecutor(max_workers=16) as pool:
            ids = list(pool.map(add, range(200)))

        stored = self.store.load()[DAY]
        self.assertEqual(len(stored), 200)
        self.assertEqual({e.id for e in stored}, set(ids))
        self.assertEqual(sum(e.calories for e in stored), sum(range(200)))

    def test_save_leaves_no_temp_files(self) -> None:
        for _ in range(3):
            with self.store.session(write=True) as repo:
                repo.create(DAY, "Apple", 95, now=NOON)
        self.assertEqual([p.name for p in self.data_file.parent.iterdir()], ["data.json"])

    def test_failed_replace_raises_write_error_and_cleans_up(self) -> None:
        self.store.ensure_initialized()
        with mock.patch("calorie_tracker.entries.storage.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(StoreWriteError):
                self.store.save({})
        self.assertEqual([p.name for p in self.data_file.parent.iterdir()], ["data.json"])
        self.assertEqual(self._read_file(), {"entries": {}})


if __name__ == "__main__":
    unittest.main()
