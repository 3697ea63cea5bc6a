"""Bounded memory of recently served word ids.

The store is a JSON array rewritten in full on every change, most recent
first. Two on-disk shapes are read:

- `[{"id": "cat", "ts": 1700000000000}, ...]`
- `["cat", "dog", ...]` (older bare-id files)

Only the first shape is ever written. Bare ids are migrated with an unknown
timestamp (`ts: null`) and are never dropped by the TTL, only by the size
bound.
"""

from __future__ import annotations

from copy import deepcopy
import json
import logging
import math
from pathlib import Path
import time
from typing import Any, Callable, Optional

from .models import RecencyRecord


LOGGER = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class RecencyStorage:
    """Raw persistence for the decoded JSON payload."""

    def read(self) -> Any:
        """Return the stored payload, or None when nothing is stored."""
        raise NotImplementedError

    def write(self, payload: Any) -> None:
        raise NotImplementedError


class MemoryStorage(RecencyStorage):
    def __init__(self, payload: Any = None) -> None:
        self.payload = deepcopy(payload)
        self.writes = 0

    def read(self) -> Any:
        return deepcopy(self.payload)

    def write(self, payload: Any) -> None:
        self.payload = deepcopy(payload)
        self.writes += 1


class FileStorage(RecencyStorage):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> Any:
        if not self.path.exists():
            return None
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return None
        return json.loads(raw)

    def write(self, payload: Any) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def _coerce_ts(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def parse_records(payload: Any) -> list[RecencyRecord]:
    """Decode either persisted shape; unknown items are skipped."""
    if not isinstance(payload, list):
        return []

    out: list[RecencyRecord] = []
    seen: set[str] = set()
    for item in payload:
        if isinstance(item, str):
            rid, ts = item, None
        elif isinstance(item, dict) and item.get("id"):
            rid, ts = str(item["id"]), _coerce_ts(item.get("ts"))
        else:
            continue
        if not rid or rid in seen:
            continue
        seen.add(rid)
        out.append(RecencyRecord(id=rid, timestamp=ts))
    return out


class RecencyStore:
    """Time and size bounded list of served ids.

    `ttl_ms` and `max_size` are independent; a value <= 0 disables that bound.
    Storage failures never reach the caller: reads degrade to an empty list
    and writes are best-effort.
    """

    def __init__(
        self,
        storage: RecencyStorage,
        ttl_ms: int = 0,
        max_size: int = 0,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.storage = storage
        self.ttl_ms = int(ttl_ms or 0)
        self.max_size = int(max_size or 0)
        self.clock = clock

    def _save(self, records: list[RecencyRecord]) -> None:
        try:
            self.storage.write([r.to_json() for r in records])
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("Failed to save recent words: %s", exc)

    def load(self) -> list[RecencyRecord]:
        """Read the store, drop expired entries and persist the cleaned list."""
        try:
            payload = self.storage.read()
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("Failed to load recent words: %s", exc)
            return []

        if payload is None:
            return []
        if not isinstance(payload, list):
            LOGGER.warning("Recent words store has unexpected format (%s). Ignoring.", type(payload).__name__)
            return []

        try:
            records = parse_records(payload)
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("Failed to decode recent words: %s", exc)
            return []
        if self.ttl_ms > 0:
            now = self.clock()
            kept = [r for r in records if r.timestamp is None or now - r.timestamp <= self.ttl_ms]
            if len(kept) != len(records):
                LOGGER.info("Expired %d recent word(s)", len(records) - len(kept))
            records = kept

        self._save(records)
        return records

    def ids(self) -> list[str]:
        return [r.id for r in self.load()]

    def push(self, word_id: str) -> None:
        if not word_id:
            return
        word_id = str(word_id)
        records = [r for r in self.load() if r.id != word_id]
        records.insert(0, RecencyRecord(id=word_id, timestamp=self.clock()))
        if self.max_size > 0:
            records = records[: self.max_size]
        self._save(records)

    def clear(self) -> None:
        self._save([])
