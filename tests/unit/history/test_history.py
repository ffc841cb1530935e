"""Tests for bounded directory history and ``cd -`` resolution.

Confirms adjacent-duplicate suppression, two-entry trimming, persistence
through a struct store, and current-directory skipping.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from smartcd.cache import ShellCache
from smartcd.errors import HistoryCorruptError
from smartcd.history import (
    HISTORY_CACHE_KEY,
    MAX_HISTORY,
    History,
    append,
    load_history,
    record_directory,
    resolve_previous,
    save_history,
)


class MemoryStore:
    """Dict-backed struct store that counts writes."""

    def __init__(self, data: dict[str, object] | None = None) -> None:
        self.data = dict(data or {})
        self.writes = 0

    def get_struct(self, key: str) -> object | None:
        return self.data.get(key)

    def put_struct(self, key: str, value: object) -> None:
        self.writes += 1
        self.data[key] = value


class HistoryTests(unittest.TestCase):
    def test_append_skips_repeat_of_newest_entry(self) -> None:
        history = History(["/a"])
        self.assertFalse(append(history, "/a"))
        self.assertFalse(append(history, "/a"))
        self.assertEqual(history.entries, ["/a"])

    def test_append_keeps_two_most_recent(self) -> None:
        history = History()
        for directory in ("/1", "/2", "/3", "/4"):
            self.assertTrue(append(history, directory))
            self.assertLessEqual(len(history.entries), MAX_HISTORY)
        self.assertEqual(history.entries, ["/3", "/4"])

    def test_non_adjacent_repeat_is_recorded(self) -> None:
        history = History()
        for directory in ("/a", "/b", "/a"):
            append(history, directory)
        self.assertEqual(history.entries, ["/b", "/a"])

    def test_long_loaded_history_is_kept_until_next_append(self) -> None:
        history = History(["/1", "/2", "/3", "/4", "/5"])
        self.assertEqual(history.entries, ["/1", "/2", "/3", "/4", "/5"])
        append(history, "/6")
        self.assertEqual(history.entries, ["/5", "/6"])

    def test_struct_round_trip(self) -> None:
        history = History(["/x", "/y"])
        self.assertEqual(History.from_struct(history.to_struct()), history)

    def test_from_struct_rejects_wrong_shapes(self) -> None:
        for bad in ("text", ["/a"], {"entries": "/a"}, {"entries": ["/a", 3]}):
            with self.assertRaises(HistoryCorruptError):
                History.from_struct(bad)


class ResolvePreviousTests(unittest.TestCase):
    def test_empty_history_goes_home(self) -> None:
        self.assertEqual(resolve_previous(History(), "/cwd"), "cd")

    def test_only_current_directory_goes_home(self) -> None:
        self.assertEqual(resolve_previous(History(["/cwd"]), "/cwd"), "cd")
        self.assertEqual(resolve_previous(History(["/cwd", "/cwd"]), "/cwd"), "cd")

    def test_newest_entry_other_than_cwd_wins(self) -> None:
        self.assertEqual(resolve_previous(History(["old/dir"]), "/cwd"), 'cd "old/dir"')
        self.assertEqual(resolve_previous(History(["/one", "/two"]), "/cwd"), 'cd "/two"')

    def test_current_directory_is_skipped(self) -> None:
        self.assertEqual(resolve_previous(History(["old/dir/1", "/cwd"]), "/cwd"), 'cd "old/dir/1"')

    def test_long_history_skips_every_current_directory_entry(self) -> None:
        data = {"entries": ["old/dir/1", "/cwd", "old/dir/2", "/cwd", "/cwd", "/cwd"]}
        self.assertEqual(resolve_previous(History.from_struct(data), "/cwd"), 'cd "old/dir/2"')

    def test_plain_mode(self) -> None:
        self.assertEqual(resolve_previous(History(["/one"]), "/cwd", plain=True), "cd /one")


class HistoryStoreTests(unittest.TestCase):
    def test_load_missing_history_is_empty(self) -> None:
        self.assertEqual(load_history(MemoryStore()), History())

    def test_record_saves_only_on_change(self) -> None:
        store = MemoryStore()
        record_directory(store, "/a")
        record_directory(store, "/a")
        self.assertEqual(store.writes, 1)
        self.assertEqual(store.data[HISTORY_CACHE_KEY], {"entries": ["/a"]})

    def test_record_truncates_persisted_history(self) -> None:
        store = MemoryStore({HISTORY_CACHE_KEY: {"entries": ["old/dir/4", "old/dir/5"]}})
        record_directory(store, "/cwd")
        self.assertEqual(load_history(store).entries, ["old/dir/5", "/cwd"])

    def test_record_unchanged_when_already_newest(self) -> None:
        store = MemoryStore({HISTORY_CACHE_KEY: {"entries": ["old/dir/1", "/cwd"]}})
        record_directory(store, "/cwd")
        self.assertEqual(store.writes, 0)
        self.assertEqual(load_history(store).entries, ["old/dir/1", "/cwd"])

    def test_long_history_unchanged_when_cwd_already_newest(self) -> None:
        entries = ["old/dir/1", "/cwd", "old/dir/2", "/cwd", "/cwd", "/cwd"]
        store = MemoryStore({HISTORY_CACHE_KEY: {"entries": list(entries)}})
        record_directory(store, "/cwd")
        self.assertEqual(store.writes, 0)
        self.assertEqual(load_history(store).entries, entries)

    def test_corrupt_cache_file_surfaces_decode_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = ShellCache(Path(tmp), "42")
            cache.path.write_text("} invalid json {", encoding="utf-8")
            with self.assertRaises(HistoryCorruptError) as exc_info:
                load_history(cache)
            message = str(exc_info.exception)
            self.assertTrue(message.startswith("failed to get struct data: failed to unmarshal cache data: "))

    def test_save_and_load_through_shell_cache(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = ShellCache(Path(tmp), "42")
            save_history(cache, History(["/a", "/b"]))
            self.assertEqual(load_history(ShellCache(Path(tmp), "42")).entries, ["/a", "/b"])


if __name__ == "__main__":
    unittest.main()
