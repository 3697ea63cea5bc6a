"""Build normalized `WordRecord`s from a selected sense or an agent payload."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from .models import Sense, SourceUnavailable, WordRecord, derive_word_id


LOGGER = logging.getLogger(__name__)

NO_DEFINITION = "No definition available"

DIFFICULTY_LABELS = {1: "easy", 2: "medium-easy", 3: "medium"}


def difficulty_label(difficulty: Any) -> str:
    if isinstance(difficulty, str):
        return difficulty
    return DIFFICULTY_LABELS.get(difficulty, "")


def _empty_translations(codes: Sequence[str]) -> dict[str, Optional[str]]:
    out: dict[str, Optional[str]] = {"en": None}
    for code in codes:
        out[code] = None
    return out


def extract_record(
    sense: Optional[Sense],
    word: str,
    codes: Sequence[str],
    difficulty: Any = None,
) -> WordRecord:
    """Turn the selected sense into a record keyed by every configured language.

    The first translation per language wins. `sense` may be None when the
    entry had no senses; the record then carries the placeholder concept and
    only the English word.
    """

    label = difficulty_label(difficulty)
    translations = _empty_translations(codes)
    translations["en"] = word

    concept = NO_DEFINITION
    if sense is not None:
        if sense.definition:
            concept = f"{sense.definition} [{label}]" if label else sense.definition
        for t in sense.translations:
            if not t.language_code or not t.word:
                continue
            if t.language_code in translations and translations[t.language_code] is None:
                translations[t.language_code] = t.word

    return WordRecord(
        word=word,
        id=derive_word_id(word),
        concept=concept,
        translations=translations,
        difficulty=label,
    )


def record_from_payload(payload: Any, codes: Sequence[str]) -> WordRecord:
    """Normalize a pre-resolved `{word, id?, definition?, translations}` payload.

    Raises SourceUnavailable when the payload is not an object with a
    non-empty `word`, or when `translations` is present but not an object.
    """

    if not isinstance(payload, dict):
        raise SourceUnavailable(f"Expected an object payload, got {type(payload).__name__}")

    word = payload.get("word")
    if not isinstance(word, str) or not word.strip():
        raise SourceUnavailable("Payload has no word")

    raw_translations = payload.get("translations") or {}
    if not isinstance(raw_translations, dict):
        raise SourceUnavailable("Payload translations must be an object")

    translations = _empty_translations(codes)
    for code, value in raw_translations.items():
        if code == "en" or code not in translations:
            continue
        if isinstance(value, str) and value.strip():
            translations[code] = value
    translations["en"] = word

    raw_id = payload.get("id")
    word_id = str(raw_id) if raw_id not in (None, "") else derive_word_id(word)

    definition = payload.get("definition")
    concept = definition if isinstance(definition, str) and definition.strip() else NO_DEFINITION

    return WordRecord(
        word=word,
        id=word_id,
        concept=concept,
        translations=translations,
        difficulty=difficulty_label(payload.get("difficulty")),
    )
