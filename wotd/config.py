"""Configuration loading.

YAML config is merged over `DEFAULT_CONFIG`. The selection core never reads
this dict directly: it receives a `CoreConfig` built from it.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

import yaml

from .models import Language


LOGGER = logging.getLogger(__name__)

DEFAULT_LABELS: dict[str, str] = {
    "de": "DE", "es": "ES", "fr": "FR", "it": "IT", "pt": "PT", "nl": "NL",
    "pl": "PL", "ru": "RU", "id": "ID", "vi": "VI", "th": "TH", "ms": "MS",
    "zh": "ZH", "ja": "JA", "ko": "KO", "ar": "AR", "hi": "HI", "tr": "TR",
    "sv": "SV", "no": "NO", "km": "KM",
}

DEFAULT_CONFIG: dict[str, Any] = {
    "languages": {
        "targets": ["de", "id", "vi"],
        "labels": dict(DEFAULT_LABELS),
    },
    "recent": {
        "path": "recent_words.json",
        "ttl_ms": 5 * 60 * 1000,
        "max_size": 0,
    },
    "source": {
        "mode": "api",
        "words_to_fetch": 5,
        "difficulty": 1,
        "dictionary": "free_dictionary_api",
    },
    "api": {
        "random_word_url": "https://random-word-api.herokuapp.com/word",
        "dictionary_url": "https://freedictionaryapi.com/api/v1/entries/en/",
    },
    "agent": {
        "tool_id": "word.of.the.day.multilingual",
    },
    "http": {
        "retry_count": 3,
        "retry_delay": 1.5,
        "timeout_sec": 20,
    },
    "paths": {
        "logs_dir": "logs",
    },
}


def cfg_get(cfg: dict[str, Any], path: str, default: Any) -> Any:
    cur: Any = cfg
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def _deep_update(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = deepcopy(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_update(out[k], v)
        else:
            out[k] = v
    return out


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load YAML config and merge with defaults.

    If config file is missing or unreadable, returns hardcoded defaults.
    """

    cfg_path = Path(config_path)
    if not cfg_path.exists():
        LOGGER.warning("Config not found: %s. Using defaults.", cfg_path)
        return deepcopy(DEFAULT_CONFIG)

    try:
        loaded = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        LOGGER.warning("Failed to parse config (%s). Using defaults.", exc)
        return deepcopy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        LOGGER.warning("Config format invalid. Using defaults.")
        return deepcopy(DEFAULT_CONFIG)
    return _deep_update(DEFAULT_CONFIG, loaded)


def _language_code(raw: Any) -> str:
    # YAML 1.1 reads an unquoted `no` (Norwegian) as False.
    if raw is False:
        return "no"
    if not isinstance(raw, str):
        if raw is not None:
            LOGGER.warning("Ignoring non-string language code: %r", raw)
        return ""
    return raw.strip().lower()


def build_languages(codes: list[str], labels: dict[str, str] | None = None) -> tuple[Language, ...]:
    """Return the display languages, `en` first, then each target once."""
    names = {
        _language_code(k): v
        for k, v in (labels or {}).items()
        if isinstance(v, str) and v.strip()
    }
    out = [Language(code="en", label=names.get("en", "EN"))]
    seen = {"en"}
    for raw in codes or []:
        code = _language_code(raw)
        if not code or code in seen:
            continue
        seen.add(code)
        out.append(Language(code=code, label=names.get(code) or code.upper()))
    return tuple(out)


@dataclass(frozen=True)
class CoreConfig:
    languages: tuple[Language, ...]
    ttl_ms: int = 0
    max_size: int = 0

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(lang.code for lang in self.languages)

    @property
    def target_codes(self) -> tuple[str, ...]:
        return tuple(c for c in self.codes if c != "en")

    @classmethod
    def from_dict(cls, cfg: dict[str, Any]) -> "CoreConfig":
        languages = build_languages(
            cfg_get(cfg, "languages.targets", []),
            cfg_get(cfg, "languages.labels", {}),
        )
        return cls(
            languages=languages,
            ttl_ms=int(cfg_get(cfg, "recent.ttl_ms", 0) or 0),
            max_size=int(cfg_get(cfg, "recent.max_size", 0) or 0),
        )
