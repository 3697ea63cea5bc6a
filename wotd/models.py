"""Typed records shared by the selection pipeline.

Dictionary and agent payloads are converted into these dataclasses at the
boundary (see `dictionary.py` and `sources.py`), so downstream code never
touches raw JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


class WotdError(Exception):
    """Base class for word-of-the-day failures."""


class SourceUnavailable(WotdError):
    """Word, agent or dictionary source unreachable or returned a malformed payload."""


class NoDictionaryEntry(WotdError):
    """Dictionary lookup succeeded but found nothing for the word."""


class TotalFailure(WotdError):
    """No candidate in a batch produced any record."""


@dataclass(frozen=True)
class Language:
    code: str
    label: str


@dataclass(frozen=True)
class Translation:
    language_code: str
    word: str


@dataclass(frozen=True)
class Sense:
    definition: Optional[str] = None
    translations: tuple[Translation, ...] = ()


@dataclass(frozen=True)
class DictionaryEntry:
    word: str
    senses: tuple[Sense, ...] = ()


@dataclass
class WordRecord:
    word: str
    id: str
    concept: str
    translations: dict[str, Optional[str]] = field(default_factory=dict)
    difficulty: str = ""

    def covered_languages(self, codes: list[str] | tuple[str, ...]) -> list[str]:
        return [c for c in codes if self.translations.get(c) is not None]

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "id": self.id,
            "concept": self.concept,
            "difficulty": self.difficulty,
            "translations": dict(self.translations),
        }


@dataclass(frozen=True)
class RecencyRecord:
    id: str
    # None marks an entry migrated from the bare-id format (age unknown).
    timestamp: Optional[int]

    def to_json(self) -> dict:
        return {"id": self.id, "ts": self.timestamp}


def derive_word_id(word: str | None) -> str:
    """Lowercase and trim only; diacritics and punctuation are kept as given."""
    if not word:
        return ""
    return str(word).strip().lower()
