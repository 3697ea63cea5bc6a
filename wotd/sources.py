"""Word sources: random-word API batches, an Elastic agent tool, and a built-in list.

Batch sources return a `CandidateBatch`; the agent and static sources return
a pre-resolved payload `{word, id?, definition?, translations}`.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import random
from typing import Any, Iterable

import requests

from .config import cfg_get
from .models import SourceUnavailable
from .transport import decode_json, send_request


LOGGER = logging.getLogger(__name__)

DEFAULT_TOOL_ID = "word.of.the.day.multilingual"

STATIC_ENTRIES: list[dict[str, str]] = [
    {"concept": "to get used to something new", "en": "to adapt", "de": "sich anpassen", "id": "beradaptasi", "vi": "thích nghi", "km": "som-ROP-kloon"},
    {"concept": "to postpone to a later time", "en": "to postpone", "de": "verschieben", "id": "menunda", "vi": "hoãn lại", "km": "PON-yee-ah-PEL"},
    {"concept": "to handle a difficult situation", "en": "to cope", "de": "zurechtkommen", "id": "mengatasi", "vi": "đối phó", "km": "TOP-tohl"},
    {"concept": "to make something easier", "en": "to simplify", "de": "vereinfachen", "id": "menyederhanakan", "vi": "đơn giản hóa", "km": "som-ROOL"},
    {"concept": "to critically examine something", "en": "to analyze", "de": "analysieren", "id": "menganalisis", "vi": "phân tích", "km": "vee-PEE-ak"},
    {"concept": "to justify an action or opinion", "en": "to justify", "de": "rechtfertigen", "id": "membenarkan", "vi": "biện minh", "km": "rek-FAIR"},
    {"concept": "to rely on someone or something", "en": "to rely on", "de": "sich verlassen auf", "id": "mengandalkan", "vi": "dựa vào", "km": "ah-SAH-rye ler"},
    {"concept": "to consider carefully before acting", "en": "to reconsider", "de": "überdenken", "id": "mempertimbangkan kembali", "vi": "xem xét lại", "km": "pee-ja-RA-na m'dong-TEET"},
    {"concept": "to gradually increase in intensity", "en": "to escalate", "de": "eskalieren", "id": "meningkat tajam", "vi": "leo thang", "km": "KERN-laeng"},
    {"concept": "to gradually decrease or weaken", "en": "to diminish", "de": "abnehmen", "id": "berkurang", "vi": "giảm bớt", "km": "jom-TOCH-toch"},
    {"concept": "inner strength and persistence", "en": "resilience", "de": "Widerstandskraft", "id": "ketangguhan", "vi": "khả năng chống chịu", "km": "pee-ap-THON-trorm"},
    {"concept": "ability to change direction easily", "en": "flexibility", "de": "Flexibilität", "id": "fleksibilitas", "vi": "tính linh hoạt", "km": "pee-ap-BUT-bain"},
    {"concept": "clear and logical thinking", "en": "clarity", "de": "Klarheit", "id": "kejelasan", "vi": "sự rõ ràng", "km": "pee-ap-CLAHS-lahs"},
    {"concept": "strong wish to do something", "en": "determination", "de": "Entschlossenheit", "id": "keteguhan", "vi": "sự quyết tâm", "km": "sa-MRET-jet RING-mahm"},
    {"concept": "state of being under pressure", "en": "tension", "de": "Anspannung", "id": "ketegangan", "vi": "căng thẳng", "km": "pee-ap-TEN-teng"},
    {"concept": "unexpected positive result", "en": "breakthrough", "de": "Durchbruch", "id": "terobosan", "vi": "bước đột phá", "km": "BUHK-dote-FAR"},
    {"concept": "something that causes delay", "en": "obstacle", "de": "Hindernis", "id": "rintangan", "vi": "chướng ngại vật", "km": "OOP-a-sok"},
    {"concept": "small but important detail", "en": "nuance", "de": "Nuance", "id": "nuansa", "vi": "sắc thái", "km": "SUK-tai"},
]


@dataclass(frozen=True)
class CandidateBatch:
    words: tuple[str, ...]
    difficulty: int | None = None


class RandomWordSource:
    """Fetch N random headwords of one difficulty tier."""

    def __init__(self, cfg: dict[str, Any], session: requests.Session | None = None) -> None:
        self.cfg = cfg
        self.url = str(cfg_get(cfg, "api.random_word_url", "https://random-word-api.herokuapp.com/word"))
        self.count = int(cfg_get(cfg, "source.words_to_fetch", 5))
        self.difficulty = int(cfg_get(cfg, "source.difficulty", 1))
        self.session = session

    def fetch(self, exclude: Iterable[str] = ()) -> CandidateBatch:
        # The API has no exclusion parameter; the resolver skips recent ids.
        resp = send_request(
            self.session,
            "GET",
            self.url,
            self.cfg,
            params={"number": self.count, "diff": self.difficulty},
        )
        payload = decode_json(resp, "random word API")
        LOGGER.info("Random words response (diff=%s): %s", self.difficulty, payload)

        if not isinstance(payload, list) or not payload:
            raise SourceUnavailable("Invalid random word response")
        words = tuple(str(w).strip() for w in payload if isinstance(w, str) and w.strip())
        if not words:
            raise SourceUnavailable("Invalid random word response")
        return CandidateBatch(words=words, difficulty=self.difficulty)


def parse_agent_response(response: Any) -> dict[str, Any]:
    """Unwrap `results[0].data.execution.output` into the word payload."""

    if not isinstance(response, dict):
        raise SourceUnavailable("Empty response from Elastic tool")

    results = response.get("results")
    if not isinstance(results, list) or not results:
        raise SourceUnavailable("No results in Elastic response")

    first = results[0] if isinstance(results[0], dict) else {}
    data = first.get("data")
    execution = data.get("execution") if isinstance(data, dict) else None
    if not isinstance(execution, dict):
        raise SourceUnavailable("No execution data in response")

    status = execution.get("status")
    if status != "completed":
        raise SourceUnavailable(f"Execution status: {status}")

    output = execution.get("output")
    if not output:
        raise SourceUnavailable("No output in execution data")
    if isinstance(output, str):
        try:
            output = json.loads(output)
        except ValueError as exc:
            raise SourceUnavailable("Execution output is not valid JSON") from exc
    if not isinstance(output, dict):
        raise SourceUnavailable("Execution output is not an object")
    return output


class ElasticAgentSource:
    """Call an Elastic Agent Builder tool that picks and translates a word itself."""

    def __init__(
        self,
        cfg: dict[str, Any],
        api_url: str,
        api_key: str,
        tool_id: str = "",
        session: requests.Session | None = None,
    ) -> None:
        self.cfg = cfg
        self.api_url = api_url
        self.api_key = api_key
        self.tool_id = tool_id or str(cfg_get(cfg, "agent.tool_id", DEFAULT_TOOL_ID))
        self.session = session

    def fetch(self, exclude: Iterable[str] = ()) -> dict[str, Any]:
        if not self.api_url or not self.api_key:
            raise SourceUnavailable(
                "Missing Elastic API configuration. Set ELASTIC_API_URL and ELASTIC_API_KEY "
                "in your environment (see .env.example)"
            )

        body = {"tool_id": self.tool_id, "tool_params": {"recent_words": list(exclude)}}
        LOGGER.info("Calling Elastic tool %s", self.tool_id)
        resp = send_request(
            self.session,
            "POST",
            self.api_url,
            self.cfg,
            headers={
                "kbn-xsrf": "true",
                "Content-Type": "application/json",
                "Authorization": f"ApiKey {self.api_key}",
            },
            json=body,
        )
        response = decode_json(resp, "Elastic tool")
        LOGGER.debug("Elastic response: %s", response)
        payload = parse_agent_response(response)
        LOGGER.info("Parsed output: %s", payload)
        return payload


class StaticWordSource:
    def __init__(self, entries: list[dict[str, str]] | None = None, rng: random.Random | None = None) -> None:
        self.entries = list(entries if entries is not None else STATIC_ENTRIES)
        self.rng = rng or random.Random()

    def fetch(self, exclude: Iterable[str] = ()) -> dict[str, Any]:
        if not self.entries:
            raise SourceUnavailable("Static word list is empty")

        recent = {str(x).strip().lower() for x in exclude}
        fresh = [e for e in self.entries if str(e.get("en", "")).strip().lower() not in recent]
        entry = self.rng.choice(fresh or self.entries)
        return {
            "word": entry.get("en", ""),
            "definition": entry.get("concept", ""),
            "translations": {k: v for k, v in entry.items() if k not in ("en", "concept")},
        }
