import pytest
import requests

from brc import remote


class FakeResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self.payload = payload
        self.status = status
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        if self.bad_json:
            raise ValueError("not json")
        return self.payload


def test_passage_url_quotes_reference():
    assert remote.passage_url("John 3") == "https://bible-api.com/John%203?translation=web"
    assert remote.passage_url("John 3:16", "kjv").endswith("John%203%3A16?translation=kjv")


def test_fetch_passage(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(
            {
                "reference": "John 3:16",
                "verses": [{"book_name": "John", "chapter": 3, "verse": 16, "text": "For God so loved...\n"}],
            }
        )

    monkeypatch.setattr(requests, "get", fake_get)
    passage = remote.fetch_passage("John 3:16")

    assert passage.reference == "John 3:16"
    assert passage.texts() == ["For God so loved..."]
    assert calls == [(remote.passage_url("John 3:16"), remote.config.REMOTE_TIMEOUT)]


def test_fetch_passage_uses_session():
    class Session:
        def get(self, url, timeout):
            return FakeResponse({"reference": "Genesis 1", "verses": []})

    passage = remote.fetch_passage("Genesis 1", session=Session())
    assert passage.reference == "Genesis 1"
    assert passage.verses == []


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(status=404),
        FakeResponse(bad_json=True),
        FakeResponse({"error": "not found"}),
        FakeResponse(["not", "an", "object"]),
    ],
)
def test_fetch_passage_failures_return_none(monkeypatch, response):
    monkeypatch.setattr(requests, "get", lambda url, timeout: response)
    assert remote.fetch_passage("Nowhere 1") is None


def test_fetch_passage_connection_error(monkeypatch, capsys):
    def fake_get(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "get", fake_get)
    assert remote.fetch_passage("John 3") is None
    assert "offline" in capsys.readouterr().err
