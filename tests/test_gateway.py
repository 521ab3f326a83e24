"""Tests for app.services.score_gateway: local and HTTP adapters."""

from __future__ import annotations

import pytest
import requests

from app.domain.scores.service import TYPING, SPEED, ScoreValidationError, list_scores
from app.services.score_gateway import (
    LocalScoreGateway, HttpScoreGateway, GatewayError, kind_for_game,
)


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        return self._payload


class FakeSession(requests.Session):
    def __init__(self, response):
        super().__init__()
        self.response = response
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return self.response

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self.response


class TestLocalGateway:
    def test_submit_persists(self, session_factory, db, user):
        gw = LocalScoreGateway(TYPING, user.id, session_factory)
        out = gw.submit({"duration": 30, "words": 24, "wordsPerMinute": 48.0})
        assert out["wordsPerMinute"] == 48.0
        assert [r.words for r in list_scores(db, TYPING, user.id)] == [24]

    def test_submit_invalid_raises(self, session_factory, user):
        gw = LocalScoreGateway(SPEED, user.id, session_factory)
        with pytest.raises(ScoreValidationError):
            gw.submit({"duration": 0, "clicks": 1, "clicksPerSecond": 1.0})


class TestHttpGateway:
    def test_posts_with_bearer_token(self):
        fake = FakeSession(FakeResponse(201, {"id": 1}))
        gw = HttpScoreGateway(TYPING, "tok", base_url="http://scores.test/", session=fake)
        assert gw.submit({"duration": 30, "words": 1, "wordsPerMinute": 2.0}) == {"id": 1}
        method, url, kwargs = fake.calls[0]
        assert (method, url) == ("POST", "http://scores.test/typing-scores")
        assert kwargs["json"]["words"] == 1
        assert fake.headers["Authorization"] == "Bearer tok"

    def test_error_status_raises(self):
        fake = FakeSession(FakeResponse(401, text="unauthorized"))
        gw = HttpScoreGateway(SPEED, "tok", base_url="http://scores.test", session=fake)
        with pytest.raises(GatewayError):
            gw.list()
        assert fake.calls[0][1] == "http://scores.test/speed-scores"

    def test_list_returns_json_rows(self):
        rows = [{"id": 2, "duration": 30, "words": 8}, {"id": 1, "duration": 30, "words": 5}]
        fake = FakeSession(FakeResponse(200, rows))
        gw = HttpScoreGateway(TYPING, "tok", base_url="http://scores.test", session=fake)
        assert gw.list() == rows
        method, url, kwargs = fake.calls[0]
        assert (method, url) == ("GET", "http://scores.test/typing-scores")
        assert kwargs["timeout"] == gw.timeout


def test_kind_for_game():
    assert kind_for_game("keystroke-timer") is TYPING
    assert kind_for_game("timer-game") is SPEED
