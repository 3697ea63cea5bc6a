"""Tests for dictionary payload validation and lookups."""

from types import SimpleNamespace
from unittest.mock import MagicMock, Mock

import pytest
import requests

from conftest import make_response
from wotd.dictionary import FreeDictionaryClient, WordNetDictionary, parse_dictionary_payload
from wotd.models import NoDictionaryEntry, SourceUnavailable

CFG = {"http": {"retry_count": 2, "retry_delay": 0, "timeout_sec": 1}}

RUN_PAYLOAD = {
    "word": "run",
    "entries": [
        {
            "partOfSpeech": "verb",
            "senses": [
                {"definition": "to move quickly", "translations": [
                    {"language": {"code": "de", "name": "German"}, "word": "laufen"},
                    {"language": {"code": "fr"}, "word": "courir"},
                    {"language": {"name": "Mystery"}, "word": "zzz"},
                    {"language": {"code": "vi"}},
                ]},
                {"definition": "  ", "translations": None},
            ],
        },
        {"senses": [{"definition": "ignored second entry"}]},
    ],
}


def test_parse_uses_first_entry():
    entry = parse_dictionary_payload(RUN_PAYLOAD, "run")

    assert len(entry.senses) == 2
    first, second = entry.senses
    assert first.definition == "to move quickly"
    assert [(t.language_code, t.word) for t in first.translations] == [("de", "laufen"), ("fr", "courir")]
    assert second.definition is None
    assert second.translations == ()


def test_parse_missing_senses_is_not_an_error():
    entry = parse_dictionary_payload({"word": "blip", "entries": [{"partOfSpeech": "noun"}]}, "blip")
    assert entry.senses == ()


@pytest.mark.parametrize("payload", [{"word": "run"}, {"word": "", "entries": [{}]}, {"title": "No Definitions Found"}])
def test_parse_no_entry(payload):
    with pytest.raises(NoDictionaryEntry):
        parse_dictionary_payload(payload, "run")


@pytest.mark.parametrize("payload", [
    [],
    "oops",
    {"word": "run", "entries": {"senses": []}},
    {"word": "run", "entries": ["x"]},
    {"word": "run", "entries": [{"senses": "x"}]},
    {"word": "run", "entries": [{"senses": ["x"]}]},
    {"word": "run", "entries": [{"senses": [{"translations": "de"}]}]},
])
def test_parse_malformed(payload):
    with pytest.raises(SourceUnavailable):
        parse_dictionary_payload(payload, "run")


def test_client_lookup_and_cache():
    session = Mock()
    session.request.return_value = make_response(200, RUN_PAYLOAD)
    client = FreeDictionaryClient(CFG, session=session)

    entry = client.lookup("run")
    client.lookup("run")

    assert entry.word == "run"
    assert session.request.call_count == 1
    kwargs = session.request.call_args.kwargs
    assert kwargs["url"] == "https://freedictionaryapi.com/api/v1/entries/en/run"
    assert kwargs["params"] == {"translations": "true"}


def test_client_quotes_word():
    client = FreeDictionaryClient({"api": {"dictionary_url": "https://dict.test/en"}})
    assert client.url_for("ice cream") == "https://dict.test/en/ice%20cream"


def test_client_404_is_no_entry():
    session = Mock()
    session.request.return_value = make_response(404, {"title": "No Definitions Found"})

    with pytest.raises(NoDictionaryEntry):
        FreeDictionaryClient(CFG, session=session).lookup("xqz123")
    assert session.request.call_count == 1


def test_client_retries_then_fails():
    session = Mock()
    session.request.side_effect = requests.ConnectionError("down")

    with pytest.raises(SourceUnavailable):
        FreeDictionaryClient(CFG, session=session).lookup("run")
    assert session.request.call_count == 2


def test_client_bad_json():
    session = Mock()
    session.request.return_value = make_response(200)

    with pytest.raises(SourceUnavailable):
        FreeDictionaryClient(CFG, session=session).lookup("run")


class FakeSynset:
    def __init__(self, definition, lemmas):
        self._definition = definition
        self._lemmas = lemmas

    def definition(self):
        return self._definition

    def lemma_names(self, lang="eng"):
        return self._lemmas.get(lang, [])


def test_wordnet_lookup_maps_languages():
    fake_wn = SimpleNamespace(synsets=lambda w: [
        FakeSynset("a domestic cat", {"ind": ["kucing"], "fra": ["chat"]}),
        FakeSynset("a spiteful woman", {}),
    ])
    entry = WordNetDictionary(["en", "id", "fr", "km"], wordnet=fake_wn).lookup("Cat")

    assert entry.word == "Cat"
    assert [s.definition for s in entry.senses] == ["a domestic cat", "a spiteful woman"]
    assert [(t.language_code, t.word) for t in entry.senses[0].translations] == [("id", "kucing"), ("fr", "chat")]


def test_wordnet_unknown_word():
    fake_wn = SimpleNamespace(synsets=lambda w: [])
    with pytest.raises(NoDictionaryEntry):
        WordNetDictionary(["de"], wordnet=fake_wn).lookup("xqz123")


def test_wordnet_missing_corpus():
    def synsets(w):
        raise LookupError("Resource wordnet not found")

    with pytest.raises(SourceUnavailable):
        WordNetDictionary(["de"], wordnet=SimpleNamespace(synsets=synsets)).lookup("cat")


def test_client_scopes_its_own_session(monkeypatch):
    scoped = MagicMock()
    scoped.__enter__.return_value = scoped
    scoped.request.return_value = make_response(200, RUN_PAYLOAD)
    monkeypatch.setattr("wotd.transport.requests.Session", lambda: scoped)

    FreeDictionaryClient(CFG).lookup("run")

    assert scoped.request.call_count == 1
    scoped.__exit__.assert_called_once()
