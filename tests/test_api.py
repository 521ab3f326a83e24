"""HTTP tests: auth, score gateways and game session endpoints."""

from __future__ import annotations

from conftest import auth_headers


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class TestAuth:
    def test_register_login_me(self, client):
        resp = client.post("/auth/register", json={
            "email": "lee@example.com", "password": "secret123", "name": "Lee",
        })
        assert resp.status_code == 201
        assert resp.json()["email"] == "lee@example.com"

        dup = client.post("/auth/register", json={
            "email": "lee@example.com", "password": "secret123", "name": "Lee",
        })
        assert dup.status_code == 409

        bad = client.post("/auth/login", data={"username": "lee@example.com", "password": "nope"})
        assert bad.status_code == 401

        token = client.post("/auth/login", data={
            "username": "lee@example.com", "password": "secret123",
        }).json()["access_token"]
        me = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["name"] == "Lee"

    def test_invalid_token(self, client):
        resp = client.get("/users/me", headers={"Authorization": "Bearer garbage"})
        assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Score gateways
# ---------------------------------------------------------------------------

class TestTypingScores:
    def test_requires_auth(self, client):
        assert client.post("/typing-scores", json={
            "duration": 30, "words": 10, "wordsPerMinute": 20.0,
        }).status_code == 401
        assert client.get("/typing-scores").status_code == 401

    def test_invalid_payload_is_400(self, client, headers):
        resp = client.post("/typing-scores", headers=headers, json={
            "duration": 0, "words": 10, "wordsPerMinute": 20.0,
        })
        assert resp.status_code == 400
        resp = client.post("/typing-scores", headers=headers, json={
            "duration": 30, "words": -1, "wordsPerMinute": 20.0,
        })
        assert resp.status_code == 400

    def test_create_and_list_newest_first(self, client, headers, user):
        for words in (5, 7, 9):
            resp = client.post("/typing-scores", headers=headers, json={
                "duration": 30, "words": words, "wordsPerMinute": words * 2.0,
            })
            assert resp.status_code == 201
            assert resp.json()["userId"] == user.id
        rows = client.get("/typing-scores", headers=headers).json()
        assert [r["words"] for r in rows] == [9, 7, 5]

    def test_cap_of_ten(self, client, headers):
        for words in range(11):
            client.post("/typing-scores", headers=headers, json={
                "duration": 30, "words": words, "wordsPerMinute": 1.0,
            })
        rows = client.get("/typing-scores", headers=headers).json()
        assert len(rows) == 10
        assert 0 not in [r["words"] for r in rows]

    def test_sorted_listing(self, client, headers):
        for wpm in (30.0, 10.0, 20.0):
            client.post("/typing-scores", headers=headers, json={
                "duration": 30, "words": 1, "wordsPerMinute": wpm,
            })
        rows = client.get("/typing-scores?sort=wordsPerMinute&direction=asc", headers=headers).json()
        assert [r["wordsPerMinute"] for r in rows] == [10.0, 20.0, 30.0]

    def test_users_only_see_their_records(self, client, headers, make_user):
        other = make_user("other@example.com", "Other")
        client.post("/typing-scores", headers=headers, json={
            "duration": 30, "words": 3, "wordsPerMinute": 6.0,
        })
        assert client.get("/typing-scores", headers=auth_headers(other)).json() == []


class TestSpeedScores:
    def test_create_and_list(self, client, headers):
        resp = client.post("/speed-scores", headers=headers, json={
            "duration": 10, "clicks": 42, "clicksPerSecond": 4.2,
        })
        assert resp.status_code == 201
        rows = client.get("/speed-scores", headers=headers).json()
        assert rows[0]["clicks"] == 42

    def test_invalid(self, client, headers):
        resp = client.post("/speed-scores", headers=headers, json={
            "duration": 10, "clicks": 1, "clicksPerSecond": -1,
        })
        assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Games
# ---------------------------------------------------------------------------

class TestGames:
    def test_validate_is_stateless(self, client):
        resp = client.post("/games/keystroke-timer/validate", json={
            "userInput": "x a b ", "referenceText": "a b c",
        })
        assert resp.status_code == 200
        assert resp.json()["wordStatuses"] == ["incorrect", "incorrect", "incorrect"]

    def test_list_games(self, client):
        assert client.get("/games").json() == ["keystroke-timer", "timer-game"]

    def test_unknown_game(self, client, headers):
        assert client.post("/games/snake/sessions", headers=headers).status_code == 404

    def test_keystroke_session_flow(self, client, headers, ticker):
        sess = client.post("/games/keystroke-timer/sessions", headers=headers).json()
        sid = sess["sessionId"]
        assert sess["state"] == "idle"
        reference = sess["referenceText"].split()

        timer = client.put(f"/games/sessions/{sid}/timer", headers=headers, json={"minutes": 2, "seconds": 40})
        assert (timer.json()["minutes"], timer.json()["seconds"]) == (1, 0)
        timer = client.put(f"/games/sessions/{sid}/timer", headers=headers, json={"minutes": 0, "seconds": 10})
        assert timer.json()["remainingSeconds"] == 10

        assert client.post(f"/games/sessions/{sid}/start", headers=headers).json()["state"] == "running"
        assert client.put(f"/games/sessions/{sid}/timer", headers=headers,
                          json={"seconds": 5}).status_code == 409

        typed = " ".join(reference[:4]) + " "
        out = client.post(f"/games/sessions/{sid}/input", headers=headers, json={"text": typed}).json()
        assert out["accepted"] is True
        assert out["correctWordCount"] == 4

        ticker.fire(10)
        done = client.get(f"/games/sessions/{sid}", headers=headers).json()
        assert done["state"] == "completed"
        assert done["finalScore"]["words"] == 4
        assert done["finalScore"]["wordsPerMinute"] == 24.0

        rows = client.get("/typing-scores", headers=headers).json()
        assert len(rows) == 1
        assert rows[0]["duration"] == 10

        late = client.post(f"/games/sessions/{sid}/input", headers=headers, json={"text": "late"}).json()
        assert late["accepted"] is False

        assert client.post(f"/games/sessions/{sid}/retry", headers=headers).json()["remainingSeconds"] == 10
        assert client.post(f"/games/sessions/{sid}/reset", headers=headers).json()["state"] == "idle"

    def test_click_session_flow(self, client, headers, ticker):
        sid = client.post("/games/timer-game/sessions", headers=headers).json()["sessionId"]
        client.put(f"/games/sessions/{sid}/timer", headers=headers, json={"minutes": 0, "seconds": 5})
        client.post(f"/games/sessions/{sid}/start", headers=headers)
        for _ in range(5):
            client.post(f"/games/sessions/{sid}/click", headers=headers)
        assert client.post(f"/games/sessions/{sid}/input", headers=headers,
                           json={"text": "x"}).status_code == 409
        ticker.fire(5)
        rows = client.get("/speed-scores", headers=headers).json()
        assert rows[0]["clicks"] == 5
        assert rows[0]["clicksPerSecond"] == 1.0

    def test_retry_without_run_is_conflict(self, client, headers):
        sid = client.post("/games/keystroke-timer/sessions", headers=headers).json()["sessionId"]
        assert client.post(f"/games/sessions/{sid}/retry", headers=headers).status_code == 409

    def test_sessions_are_private(self, client, headers, make_user):
        sid = client.post("/games/keystroke-timer/sessions", headers=headers).json()["sessionId"]
        other = auth_headers(make_user("eve@example.com", "Eve"))
        assert client.get(f"/games/sessions/{sid}", headers=other).status_code == 404

    def test_delete_releases_tick(self, client, headers, ticker):
        sid = client.post("/games/keystroke-timer/sessions", headers=headers).json()["sessionId"]
        client.post(f"/games/sessions/{sid}/start", headers=headers)
        assert len(ticker.active) == 1
        assert client.delete(f"/games/sessions/{sid}", headers=headers).json() == {"ok": True}
        assert ticker.active == []
        assert client.get(f"/games/sessions/{sid}", headers=headers).status_code == 404

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
