"""Cross-run deduplication: remember which job URLs were already reported.

Seen entries live in a JSON array of ``{"url": ..., "timestamp": <ms>}`` objects.
Entries older than the retention window are dropped on every load and save.
Storage problems never escape this module; they are logged and the run goes on.
"""
from __future__ import annotations

import json
import math
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Iterable

from jobradar.log import get_logger

log = get_logger(__name__)

RETENTION_DAYS = 30
_DAY_MS = 24 * 60 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


class SeenJobStore:
    def __init__(
        self,
        path: Path | str,
        retention_days: int = RETENTION_DAYS,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.path = Path(path)
        self.retention_days = retention_days
        self._clock = clock or _now_ms

    def _cutoff(self, now_ms: int) -> int:
        return now_ms - self.retention_days * _DAY_MS

    def _read_entries(self) -> dict[str, int]:
        """Raw url -> timestamp map from disk; raises on unreadable or corrupt files."""
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")

        entries: dict[str, int] = {}
        for item in data:
            if not isinstance(item, dict):
                continue
            url, ts = item.get("url"), item.get("timestamp")
            if not isinstance(url, str) or isinstance(ts, bool) or not isinstance(ts, (int, float)):
                continue
            if not math.isfinite(ts):
                continue
            # first entry for a url wins, matching the merge rule in save()
            entries.setdefault(url, int(ts))
        return entries

    def _prune(self, entries: dict[str, int], now_ms: int) -> dict[str, int]:
        cutoff = self._cutoff(now_ms)
        return {url: ts for url, ts in entries.items() if ts > cutoff}

    def load(self) -> set[str]:
        now_ms = self._clock()
        try:
            entries = self._read_entries()
        except (OSError, ValueError, RecursionError) as exc:
            log.warning("Could not load seen jobs from %s: %s", self.path, exc)
            return set()

        valid = self._prune(entries, now_ms)
        log.info(
            "Loaded %d previously seen jobs (%d expired)",
            len(valid), len(entries) - len(valid),
        )
        return set(valid)

    def save(self, new_urls: Iterable[str]) -> None:
        now_ms = self._clock()
        try:
            entries = self._read_entries()
        except (OSError, ValueError, RecursionError) as exc:
            log.warning("Seen jobs file %s unreadable (%s); starting a fresh cache", self.path, exc)
            entries = {}

        for url in new_urls:
            if url and url not in entries:
                entries[url] = now_ms
        entries = self._prune(entries, now_ms)

        payload = [{"url": url, "timestamp": ts} for url, ts in entries.items()]
        try:
            self._write_atomic(payload)
        except (OSError, TypeError, ValueError) as exc:
            log.warning("Could not save seen jobs to %s: %s", self.path, exc)
            return
        log.info("Saved %d seen jobs to cache", len(payload))

    def _write_atomic(self, payload: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".seen-", suffix=".json", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise
