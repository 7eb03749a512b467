import pytest
import requests

from siteless.vendors import groq


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []
        self.response = None
        self.error = None

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append((url, json, headers, timeout))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def patch_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(groq, "_SESSION", session)
    return session


def _call():
    return groq.chat_completion(
        [{"role": "user", "content": "hi"}],
        api_key="secret",
        api_url="https://groq.test/chat",
        model="llama3-70b-8192",
        timeout=30,
    )


def test_chat_completion_returns_content(patch_session):
    patch_session.response = DummyResponse(payload={"choices": [{"message": {"content": "{}"}}]})

    assert _call() == "{}"
    url, body, headers, timeout = patch_session.calls[0]
    assert url == "https://groq.test/chat"
    assert body["model"] == "llama3-70b-8192"
    assert body["temperature"] == 0.4
    assert body["max_tokens"] == 1200
    assert headers["Authorization"] == "Bearer secret"
    assert timeout == 30


def test_chat_completion_non_success_status(patch_session):
    patch_session.response = DummyResponse(status_code=429, text="rate limited")
    with pytest.raises(groq.PitchGenerationError):
        _call()


def test_chat_completion_transport_error(patch_session):
    patch_session.error = requests.Timeout("slow")
    with pytest.raises(groq.PitchGenerationError):
        _call()


@pytest.mark.parametrize("payload", [None, {"choices": []}, {"choices": [{"message": {"content": None}}]}])
def test_chat_completion_malformed_body(patch_session, payload):
    patch_session.response = DummyResponse(payload=payload)
    with pytest.raises(groq.PitchGenerationError):
        _call()
