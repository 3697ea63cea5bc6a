"""End-to-end tests for word selection with in-memory collaborators."""

import pytest

from conftest import make_entry, make_sense
from wotd.config import CoreConfig, build_languages
from wotd.models import NoDictionaryEntry, SourceUnavailable, TotalFailure
from wotd.pipeline import pick_word_of_the_day
from wotd.recency import MemoryStorage, RecencyStore
from wotd.sources import CandidateBatch, StaticWordSource


class FakeBatchSource:
    def __init__(self, *words, difficulty=1):
        self.batch = CandidateBatch(words=tuple(words), difficulty=difficulty)
        self.seen_exclude = None

    def fetch(self, exclude):
        self.seen_exclude = list(exclude)
        return self.batch


class FakeAgent:
    def __init__(self, payload):
        self.payload = payload
        self.seen_exclude = None

    def fetch(self, exclude):
        self.seen_exclude = list(exclude)
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


def lookup(word):
    entries = {
        "run": make_entry("run", make_sense("move fast", ("de", "laufen"))),
        "walk": make_entry("walk", make_sense("go on foot", ("fr", "marcher"))),
    }
    if word not in entries:
        raise NoDictionaryEntry(word)
    return entries[word]


@pytest.fixture
def store(clock):
    return RecencyStore(MemoryStorage([{"id": "old", "ts": clock.now}]), ttl_ms=60_000, clock=clock)


def test_batch_pushes_chosen_id(core, store):
    source = FakeBatchSource("xqz123", "run")
    record = pick_word_of_the_day("api", source, store, core, lookup=lookup)

    assert record.word == "run"
    assert record.concept == "move fast [easy]"
    assert source.seen_exclude == ["old"]
    assert store.ids() == ["run", "old"]


def test_batch_degraded_is_remembered(core, store):
    record = pick_word_of_the_day("api", FakeBatchSource("walk"), store, core, lookup=lookup)

    assert record.translations["de"] is None
    assert store.ids()[0] == "walk"


def test_batch_total_failure_leaves_store(core, store):
    with pytest.raises(TotalFailure):
        pick_word_of_the_day("api", FakeBatchSource("xqz123"), store, core, lookup=lookup)
    assert store.ids() == ["old"]


def test_agent_mode(core, store):
    agent = FakeAgent({"word": "Cope", "id": "cope-1", "translations": {"id": "mengatasi"}})
    record = pick_word_of_the_day("agent", agent, store, core)

    assert agent.seen_exclude == ["old"]
    assert record.translations == {"en": "Cope", "de": None, "id": "mengatasi", "vi": None}
    assert store.ids() == ["cope-1", "old"]


def test_agent_errors_propagate(core, store):
    with pytest.raises(SourceUnavailable):
        pick_word_of_the_day("agent", FakeAgent(SourceUnavailable("down")), store, core)
    assert store.ids() == ["old"]


def test_static_mode_uses_configured_languages(clock):
    core = CoreConfig(languages=build_languages(["km", "de"]))
    store = RecencyStore(MemoryStorage(), clock=clock)
    record = pick_word_of_the_day("static", StaticWordSource(), store, core)

    assert list(record.translations) == ["en", "km", "de"]
    assert record.translations["km"]
    assert store.ids() == [record.id]


def test_unknown_mode(core, store):
    with pytest.raises(ValueError):
        pick_word_of_the_day("carrier-pigeon", None, store, core)
