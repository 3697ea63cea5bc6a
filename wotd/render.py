"""Plain-text rendering for the CLI."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from .models import Language, RecencyRecord, WordRecord

NOT_FOUND = "not found"


def format_record(record: WordRecord, languages: Iterable[Language], compact: bool = False) -> str:
    lines: list[str] = []
    if not compact:
        lines.append(record.concept)
        lines.append("")
    for lang in languages:
        value = record.translations.get(lang.code)
        lines.append(f"{lang.label}: {value or NOT_FOUND}")
    return "\n".join(lines)


def format_error(message: str, details: str = "") -> str:
    out = f"Error: {message or 'Failed to load word'}"
    if details:
        out += f"\n{details}"
    return out


def _fmt_ts(ts: int | None) -> str:
    if ts is None:
        return "unknown"
    try:
        return datetime.fromtimestamp(ts / 1000, tz=timezone.utc).isoformat()
    except (ValueError, OverflowError, OSError):
        return str(ts)


def format_recent(records: Iterable[RecencyRecord]) -> str:
    rows = [f"{i}: id={r.id} time={_fmt_ts(r.timestamp)}" for i, r in enumerate(records)]
    return "\n".join(rows) if rows else "(no recent words)"
