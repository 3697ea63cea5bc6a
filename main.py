from __future__ import annotations

import argparse
from datetime import datetime
import json
import logging
import os
from pathlib import Path
import sys
from typing import Any

from dotenv import load_dotenv

from wotd.config import CoreConfig, cfg_get, load_config
from wotd.dictionary import FreeDictionaryClient, WordNetDictionary
from wotd.models import WotdError
from wotd.pipeline import pick_word_of_the_day
from wotd.recency import FileStorage, RecencyStore
from wotd.render import format_error, format_record, format_recent
from wotd.sources import ElasticAgentSource, RandomWordSource, StaticWordSource


LOGGER = logging.getLogger("wotd")


def build_store(cfg: dict[str, Any], core: CoreConfig, path: str = "") -> RecencyStore:
    recent_path = path or str(cfg_get(cfg, "recent.path", "recent_words.json"))
    return RecencyStore(FileStorage(recent_path), ttl_ms=core.ttl_ms, max_size=core.max_size)


def build_source(cfg: dict[str, Any], mode: str) -> Any:
    if mode == "api":
        return RandomWordSource(cfg)
    if mode == "agent":
        return ElasticAgentSource(
            cfg,
            api_url=os.environ.get("ELASTIC_API_URL", ""),
            api_key=os.environ.get("ELASTIC_API_KEY", ""),
            tool_id=os.environ.get("ELASTIC_TOOL_ID", ""),
        )
    if mode == "static":
        return StaticWordSource()
    raise ValueError(f"Unknown source mode: {mode}")


def build_lookup(cfg: dict[str, Any], core: CoreConfig) -> Any:
    backend = str(cfg_get(cfg, "source.dictionary", "free_dictionary_api"))
    if backend == "wordnet":
        return WordNetDictionary(core.codes).lookup
    return FreeDictionaryClient(cfg).lookup


def run(cfg: dict[str, Any], args: argparse.Namespace) -> int:
    """Pick and print one word. Returns the process exit status."""

    core = CoreConfig.from_dict(cfg)
    store = build_store(cfg, core, args.recent_file)

    if args.clear_recent:
        store.clear()
        LOGGER.info("Cleared recent words")
        return 0

    recent = store.load()
    LOGGER.info("Recent words: %s", format_recent(recent).replace("\n", "; "))
    if args.show_recent:
        print(format_recent(recent))
        return 0

    mode = args.mode or str(cfg_get(cfg, "source.mode", "api"))
    debug_info = f"Fetching data (mode={mode})..."
    try:
        source = build_source(cfg, mode)
        lookup = build_lookup(cfg, core) if mode == "api" else None
        record = pick_word_of_the_day(mode, source, store, core, lookup=lookup)
    except (WotdError, ValueError) as exc:
        LOGGER.error("Main error: %s", exc, exc_info=True)
        print(format_error(str(exc), debug_info))
        return 1

    if args.json:
        print(json.dumps(record.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_record(record, core.languages, compact=args.compact))
    return 0


def _setup_logging(cfg: dict[str, Any], verbose: bool) -> None:
    logs_dir = Path(cfg_get(cfg, "paths.logs_dir", "logs"))
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"wotd_{datetime.now().strftime('%Y%m%d')}.log"

    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=fmt,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_path, encoding="utf-8"),
        ],
        force=True,
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Multilingual word of the day")
    p.add_argument("--config", default="config.yaml", help="Config file path")
    p.add_argument("--mode", choices=["api", "agent", "static"], default=None, help="Override source.mode")
    p.add_argument("--recent-file", default="", help="Override recent.path")
    p.add_argument("--compact", action="store_true", help="Print translations only")
    p.add_argument("--json", action="store_true", help="Print the record as JSON")
    p.add_argument("--show-recent", action="store_true", help="Print recent words and exit")
    p.add_argument("--clear-recent", action="store_true", help="Empty the recent words store and exit")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    load_dotenv()

    # Load config first with lightweight fallback logging.
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    cfg = load_config(args.config)
    _setup_logging(cfg, args.verbose)

    return run(cfg, args)


if __name__ == "__main__":
    sys.exit(main())
