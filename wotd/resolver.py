"""First-match candidate resolution over a batch of words."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Callable, Iterable, Optional

from .config import CoreConfig
from .extractor import extract_record
from .models import DictionaryEntry, TotalFailure, WordRecord, derive_word_id
from .senses import select_sense


LOGGER = logging.getLogger(__name__)

Lookup = Callable[[str], DictionaryEntry]


@dataclass
class Resolution:
    record: WordRecord
    accepted: bool
    attempts: int


class CandidateResolver:
    """Try candidates in order and keep the first with target-language coverage.

    `lookup` returns a DictionaryEntry or raises; any failure skips to the
    next candidate. Candidates are processed one at a time.
    """

    def __init__(self, lookup: Lookup, config: CoreConfig) -> None:
        self.lookup = lookup
        self.config = config

    def _is_covered(self, record: WordRecord) -> bool:
        return bool(record.covered_languages(self.config.target_codes))

    def build_record(self, word: str, entry: DictionaryEntry, difficulty: Any = None) -> WordRecord:
        sense = select_sense(entry.senses, self.config.target_codes)
        if sense is None:
            LOGGER.info('Word "%s" has no senses', word)
        return extract_record(sense, word, self.config.target_codes, difficulty)

    def resolve(
        self,
        candidates: Iterable[str],
        exclude: Iterable[str] = (),
        difficulty: Any = None,
    ) -> Resolution:
        """Return the first covered record, else the last one produced.

        Raises TotalFailure when no candidate produced a record at all.
        """

        excluded = {derive_word_id(x) for x in exclude}
        last: Optional[WordRecord] = None
        attempts = 0

        for word in candidates:
            word = str(word or "").strip()
            if not word:
                continue
            if derive_word_id(word) in excluded:
                LOGGER.info('Word "%s" was served recently, skipping', word)
                continue

            attempts += 1
            LOGGER.info('Trying word %d: "%s"', attempts, word)
            try:
                entry = self.lookup(word)
            except Exception as exc:  # noqa: BLE001
                LOGGER.info('Word "%s" failed: %s, trying next...', word, exc)
                continue

            record = self.build_record(word, entry, difficulty)
            last = record
            if self._is_covered(record):
                LOGGER.info('Success! Word "%s" has translations', word)
                return Resolution(record=record, accepted=True, attempts=attempts)
            LOGGER.info('Word "%s" has no translations in target languages, trying next...', word)

        if last is None:
            raise TotalFailure("None of the fetched words have dictionary entries")

        LOGGER.warning('No words have translations, showing last word "%s" without translations', last.word)
        return Resolution(record=last, accepted=False, attempts=attempts)
