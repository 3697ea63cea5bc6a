"""Core module exports for word-of-the-day."""

from .config import CoreConfig, build_languages, load_config
from .dictionary import FreeDictionaryClient, WordNetDictionary, parse_dictionary_payload
from .extractor import extract_record, record_from_payload
from .models import (
    DictionaryEntry,
    Language,
    NoDictionaryEntry,
    RecencyRecord,
    Sense,
    SourceUnavailable,
    TotalFailure,
    Translation,
    WordRecord,
    WotdError,
    derive_word_id,
)
from .pipeline import pick_agent_word, pick_batch_word, pick_word_of_the_day
from .recency import FileStorage, MemoryStorage, RecencyStorage, RecencyStore
from .resolver import CandidateResolver, Resolution
from .senses import score_sense, select_sense
from .sources import ElasticAgentSource, RandomWordSource, StaticWordSource, parse_agent_response

__all__ = [
    "CandidateResolver",
    "CoreConfig",
    "DictionaryEntry",
    "ElasticAgentSource",
    "FileStorage",
    "FreeDictionaryClient",
    "Language",
    "MemoryStorage",
    "NoDictionaryEntry",
    "RandomWordSource",
    "RecencyRecord",
    "RecencyStorage",
    "RecencyStore",
    "Resolution",
    "Sense",
    "SourceUnavailable",
    "StaticWordSource",
    "TotalFailure",
    "Translation",
    "WordNetDictionary",
    "WordRecord",
    "WotdError",
    "build_languages",
    "derive_word_id",
    "extract_record",
    "load_config",
    "parse_agent_response",
    "parse_dictionary_payload",
    "pick_agent_word",
    "pick_batch_word",
    "pick_word_of_the_day",
    "record_from_payload",
    "score_sense",
    "select_sense",
]
