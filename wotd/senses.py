"""Sense selection by translation coverage."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .models import Sense

# Target-language hits dominate; total translation count only breaks ties.
COVERAGE_WEIGHT = 100


def is_qualifying(sense: Sense) -> bool:
    return bool(sense.definition) and len(sense.translations) > 0


def score_sense(sense: Sense, target_codes: Iterable[str]) -> int:
    targets = {c for c in target_codes if c != "en"}
    hits = sum(1 for t in sense.translations if t.language_code in targets)
    return hits * COVERAGE_WEIGHT + len(sense.translations)


def select_sense(senses: Sequence[Sense], target_codes: Iterable[str]) -> Optional[Sense]:
    """Pick the best-covered sense.

    Only senses with both a definition and translations compete; the first
    one wins ties. When none qualify, the first sense is returned. Returns
    None for an entry with no senses.
    """

    if not senses:
        return None

    targets = [c for c in target_codes if c != "en"]
    best: Optional[Sense] = None
    best_score = -1
    for sense in senses:
        if not is_qualifying(sense):
            continue
        score = score_sense(sense, targets)
        if score > best_score:
            best, best_score = sense, score

    return best if best is not None else senses[0]
