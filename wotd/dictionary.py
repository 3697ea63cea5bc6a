"""Dictionary lookups returning typed `DictionaryEntry` objects.

Sources:
1) Free Dictionary API v1 with `translations=true` (default)
2) NLTK WordNet + Open Multilingual Wordnet (offline)

Both raise NoDictionaryEntry when the word is unknown and SourceUnavailable
when the source cannot be reached or answers with a malformed payload.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from nltk.corpus import wordnet as wn
import requests

from .config import cfg_get
from .models import DictionaryEntry, NoDictionaryEntry, Sense, SourceUnavailable, Translation
from .transport import decode_json, send_request


LOGGER = logging.getLogger(__name__)

# Two-letter display codes -> OMW language codes used by nltk.
OMW_CODES = {
    "ar": "arb", "bg": "bul", "ca": "cat", "da": "dan", "el": "ell",
    "es": "spa", "eu": "eus", "fa": "fas", "fi": "fin", "fr": "fra",
    "gl": "glg", "he": "heb", "hr": "hrv", "id": "ind", "it": "ita",
    "ja": "jpn", "ms": "zsm", "nl": "nld", "no": "nob", "pl": "pol",
    "pt": "por", "ro": "ron", "sk": "slk", "sl": "slv", "sq": "sqi",
    "sv": "swe", "th": "tha", "zh": "cmn",
}


def _language_code(raw: Any) -> str:
    if isinstance(raw, dict):
        raw = raw.get("code")
    if isinstance(raw, str):
        return raw.strip().lower()
    return ""


def _parse_translations(raw: Any) -> tuple[Translation, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SourceUnavailable("Sense translations must be a list")
    out: list[Translation] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        code = _language_code(item.get("language"))
        word = item.get("word")
        # Partial rows are common upstream; drop them rather than the payload.
        if not code or not isinstance(word, str) or not word.strip():
            continue
        out.append(Translation(language_code=code, word=word.strip()))
    return tuple(out)


def parse_dictionary_payload(payload: Any, word: str) -> DictionaryEntry:
    """Validate a Free Dictionary API v1 response and convert it.

    Only the first entry's senses are used.
    """

    if not isinstance(payload, dict):
        raise SourceUnavailable(f"Dictionary payload for {word!r} is not an object")
    if not payload.get("word") or not payload.get("entries"):
        raise NoDictionaryEntry(f"Could not find dictionary entry for: {word}")

    entries = payload["entries"]
    if not isinstance(entries, list) or not isinstance(entries[0], dict):
        raise SourceUnavailable(f"Dictionary entries for {word!r} are malformed")

    raw_senses = entries[0].get("senses")
    if raw_senses is None:
        return DictionaryEntry(word=str(payload["word"]), senses=())
    if not isinstance(raw_senses, list):
        raise SourceUnavailable(f"Dictionary senses for {word!r} are malformed")

    senses: list[Sense] = []
    for raw in raw_senses:
        if not isinstance(raw, dict):
            raise SourceUnavailable(f"Dictionary sense for {word!r} is not an object")
        definition = raw.get("definition")
        senses.append(
            Sense(
                definition=definition.strip() if isinstance(definition, str) and definition.strip() else None,
                translations=_parse_translations(raw.get("translations")),
            )
        )
    return DictionaryEntry(word=str(payload["word"]), senses=tuple(senses))


class FreeDictionaryClient:
    def __init__(self, cfg: dict[str, Any], session: requests.Session | None = None) -> None:
        self.cfg = cfg
        self.base_url = str(cfg_get(cfg, "api.dictionary_url", "https://freedictionaryapi.com/api/v1/entries/en/"))
        self.session = session
        self._cache: dict[str, DictionaryEntry] = {}

    def url_for(self, word: str) -> str:
        base = self.base_url if self.base_url.endswith("/") else self.base_url + "/"
        return f"{base}{quote(word, safe='')}"

    def lookup(self, word: str) -> DictionaryEntry:
        if word in self._cache:
            return self._cache[word]

        url = self.url_for(word)
        LOGGER.info("Fetching translations from: %s", url)
        resp = send_request(
            self.session,
            "GET",
            url,
            self.cfg,
            no_retry_status=(404,),
            params={"translations": "true"},
        )
        if resp.status_code == 404:
            raise NoDictionaryEntry(f"Could not find dictionary entry for: {word}")

        entry = parse_dictionary_payload(decode_json(resp, "dictionary"), word)
        self._cache[word] = entry
        return entry

    __call__ = lookup


class WordNetDictionary:
    """Offline lookup: one sense per synset, translations from OMW lemmas."""

    def __init__(self, codes: tuple[str, ...] | list[str], wordnet: Any = None) -> None:
        self.wn = wordnet if wordnet is not None else wn
        self.codes = [c for c in codes if c != "en"]

    def lookup(self, word: str) -> DictionaryEntry:
        w = word.lower().strip()
        if not w:
            raise NoDictionaryEntry("Empty word")
        try:
            synsets = self.wn.synsets(w.replace(" ", "_"))
        except LookupError as exc:
            raise SourceUnavailable("WordNet corpus not installed (nltk.download('wordnet'))") from exc

        if not synsets:
            raise NoDictionaryEntry(f"Could not find dictionary entry for: {word}")

        senses: list[Sense] = []
        for syn in synsets:
            translations: list[Translation] = []
            for code in self.codes:
                omw = OMW_CODES.get(code)
                if not omw:
                    continue
                try:
                    names = syn.lemma_names(omw)
                except Exception:  # noqa: BLE001
                    names = []
                translations.extend(Translation(language_code=code, word=n.replace("_", " ")) for n in names)
            senses.append(Sense(definition=syn.definition() or None, translations=tuple(translations)))
        return DictionaryEntry(word=word, senses=tuple(senses))

    __call__ = lookup
