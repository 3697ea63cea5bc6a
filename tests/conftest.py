import json

import pytest
import requests

from wotd.config import CoreConfig, build_languages
from wotd.models import DictionaryEntry, Sense, Translation


class FakeClock:
    def __init__(self, now=1_700_000_000_000):
        self.now = now

    def __call__(self):
        return self.now


def make_sense(definition, *pairs):
    return Sense(definition=definition, translations=tuple(Translation(c, w) for c, w in pairs))


def make_entry(word, *senses):
    return DictionaryEntry(word=word, senses=tuple(senses))


@pytest.fixture
def core():
    return CoreConfig(languages=build_languages(["de", "id", "vi"]), ttl_ms=0, max_size=0)


@pytest.fixture
def clock():
    return FakeClock()


def make_response(status, payload=None):
    resp = requests.Response()
    resp.status_code = status
    resp._content = json.dumps(payload).encode("utf-8") if payload is not None else b"<html>"
    resp.url = "https://example.test"
    return resp
