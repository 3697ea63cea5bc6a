"""Pick the word of the day from a batch source or a single-record source."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from .config import CoreConfig
from .extractor import record_from_payload
from .models import DictionaryEntry, WordRecord
from .recency import RecencyStore
from .resolver import CandidateResolver


LOGGER = logging.getLogger(__name__)


class BatchSource(Protocol):
    def fetch(self, exclude: list[str]) -> Any: ...


class RecordSource(Protocol):
    def fetch(self, exclude: list[str]) -> dict[str, Any]: ...


def _remember(store: RecencyStore, record: WordRecord) -> None:
    if record.id:
        store.push(record.id)
        LOGGER.info("Saved %r to recent words", record.id)


def pick_batch_word(
    source: BatchSource,
    lookup: Callable[[str], DictionaryEntry],
    store: RecencyStore,
    config: CoreConfig,
) -> WordRecord:
    """Fetch a candidate batch and resolve it; source errors propagate."""
    recent = store.ids()
    batch = source.fetch(recent)
    LOGGER.info("Fetched %d words with difficulty %s", len(batch.words), batch.difficulty)

    resolution = CandidateResolver(lookup, config).resolve(batch.words, exclude=recent, difficulty=batch.difficulty)
    _remember(store, resolution.record)
    return resolution.record


def pick_agent_word(source: RecordSource, store: RecencyStore, config: CoreConfig) -> WordRecord:
    """Fetch one pre-resolved record (agent or static list)."""
    recent = store.ids()
    payload = source.fetch(recent)
    record = record_from_payload(payload, config.target_codes)
    _remember(store, record)
    return record


def pick_word_of_the_day(
    mode: str,
    source: Any,
    store: RecencyStore,
    config: CoreConfig,
    lookup: Callable[[str], DictionaryEntry] | None = None,
) -> WordRecord:
    if mode == "api":
        if lookup is None:
            raise ValueError("api mode needs a dictionary lookup")
        return pick_batch_word(source, lookup, store, config)
    if mode in ("agent", "static"):
        return pick_agent_word(source, store, config)
    raise ValueError(f"Unknown source mode: {mode}")
