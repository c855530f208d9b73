"""Tests for the LLM move advisor client (no network)."""

import json

import pytest
import requests

from plusslash.ai.advisor import GeminiAdvisor, build_prompt, parse_move
from plusslash.core.rules import apply_move
from plusslash.core.state import GameState, Outcome


def gemini_payload(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        pass


@pytest.fixture
def advisor():
    return GeminiAdvisor("test-key", model="test-model", base_url="https://example.test/v1beta/")


class TestPrompt:
    def test_describes_position(self):
        state = apply_move(GameState.new_game(), 0)
        prompt = build_prompt(state)
        assert "0:VERTICAL" in prompt
        assert "1:EMPTY" in prompt
        assert "Phase: EXPANSION" in prompt
        assert "You are: HORIZONTAL" in prompt
        assert "Locked cell (Ko rule): 0" in prompt

    def test_parse_move(self):
        assert parse_move(gemini_payload('{"move": 3}')) == 3
        assert parse_move(gemini_payload('{"move": "3"}')) is None
        assert parse_move(gemini_payload('{"move": true}')) is None
        assert parse_move(gemini_payload('{}')) is None


class TestSuggest:
    def test_legal_suggestion(self, advisor):
        advisor.session = FakeSession(FakeResponse(gemini_payload('{"move": 4}')))
        assert advisor.suggest(GameState.new_game()) == 4

        url, kwargs = advisor.session.calls[0]
        assert url == "https://example.test/v1beta/models/test-model:generateContent"
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["json"]["generationConfig"]["responseMimeType"] == "application/json"
        assert kwargs["timeout"] == advisor.timeout

    def test_ko_suggestion_rejected(self, advisor):
        state = apply_move(GameState.new_game(), 4)
        advisor.session = FakeSession(FakeResponse(gemini_payload('{"move": 4}')))
        assert advisor.suggest(state) is None

    def test_out_of_range_rejected(self, advisor):
        advisor.session = FakeSession(FakeResponse(gemini_payload('{"move": 12}')))
        assert advisor.suggest(GameState.new_game()) is None

    def test_garbled_text(self, advisor):
        advisor.session = FakeSession(FakeResponse(gemini_payload('the center, obviously')))
        assert advisor.suggest(GameState.new_game()) is None

    def test_unexpected_payload(self, advisor):
        advisor.session = FakeSession(FakeResponse({"candidates": []}))
        assert advisor.suggest(GameState.new_game()) is None

    def test_http_error(self, advisor):
        advisor.session = FakeSession(FakeResponse(status_code=503))
        assert advisor.suggest(GameState.new_game()) is None

    def test_connection_error(self, advisor):
        advisor.session = FakeSession(error=requests.ConnectionError("unreachable"))
        assert advisor.suggest(GameState.new_game()) is None

    def test_terminal_state_skips_request(self, advisor):
        advisor.session = FakeSession(FakeResponse(gemini_payload(json.dumps({"move": 0}))))
        assert advisor.suggest(GameState(outcome=Outcome.DRAW)) is None
        assert advisor.session.calls == []
