"""Tests for the Flask routes."""

import dataclasses

import pytest

import main
from conftest import SMALL, FakeClock


@pytest.fixture
def fake_clock(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr(main, "CLOCK", clock)
    monkeypatch.setattr(main, "SETTINGS", SMALL)
    main.SESSIONS.clear()
    yield clock
    main.SESSIONS.clear()
    main.THEME.teardown()
    main.THEME.init()


@pytest.fixture
def client(fake_clock):
    main.app.config["TESTING"] = True
    with main.app.test_client() as c:
        yield c


class TestPages:
    def test_index(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert b"Pseudocode" in res.data
        assert b'class="bar"' in res.data

    def test_state_payload(self, client):
        data = client.get("/api/state").get_json()
        assert data["state"] == "idle"
        assert data["view"] == "sorting"
        assert data["algorithm"] == "bubble"
        assert data["snapshot"] is None
        assert data["next_tick_ms"] is None
        assert "Ready to sort." in data["explanation"]

    def test_one_controller_per_session(self, client):
        client.get("/api/state")
        client.post("/api/start")
        assert len(main.SESSIONS) == 1

    def test_oldest_session_is_evicted(self, fake_clock, monkeypatch):
        monkeypatch.setattr(main, "SETTINGS", dataclasses.replace(SMALL, max_sessions=3))
        main.app.config["TESTING"] = True
        keeper = main.app.test_client()
        keeper.get("/api/state")
        for _ in range(4):
            main.app.test_client().get("/api/state")
            keeper.post("/api/step")
        assert len(main.SESSIONS) == 3
        # the session used between new arrivals is still the same one
        data = keeper.get("/api/state").get_json()
        assert data["snapshot"]["step_number"] == 3
        assert len(main.SESSIONS) == 3


class TestPlaybackRoutes:
    def test_start_and_tick(self, client, fake_clock):
        data = client.post("/api/start").get_json()
        assert data["state"] == "running"
        assert data["next_tick_ms"] == 51
        assert client.post("/api/tick").get_json()["advanced"] is False
        fake_clock.advance(51)
        data = client.post("/api/tick").get_json()
        assert data["advanced"] is True
        assert data["snapshot"]["step_number"] == 0

    def test_pause_and_reset(self, client):
        client.post("/api/start")
        assert client.post("/api/pause").get_json()["state"] == "paused"
        assert client.post("/api/reset").get_json()["state"] == "idle"

    def test_step(self, client):
        data = client.post("/api/step").get_json()
        assert data["state"] == "paused"
        assert data["snapshot"]["pseudocode_line"] == 0

    def test_speed(self, client):
        assert client.post("/api/speed", json={"speed": 500}).get_json()["speed"] == 100
        assert client.post("/api/speed", json={"speed": "fast"}).status_code == 400
        assert client.post("/api/speed", json={}).status_code == 400


class TestConfigRoutes:
    def test_switch_to_pathfinding(self, client):
        data = client.post("/api/config", json={"view": "pathfinding", "algorithm": "dijkstra"}).get_json()
        assert data["view"] == "pathfinding"
        assert 'class="cell"' in data["svg"]
        assert "dijkstra" in data["algo_selector"]

    def test_invalid_config(self, client):
        res = client.post("/api/config", json={"view": "sorting", "algorithm": "dijkstra"})
        assert res.status_code == 400
        assert "error" in res.get_json()
        assert client.post("/api/config", json={}).status_code == 400

    def test_toggle_wall(self, client):
        client.post("/api/config", json={"view": "pathfinding", "algorithm": "dijkstra"})
        assert client.post("/api/grid/toggle", json={"row": 1, "col": 1}).get_json()["toggled"] is True
        assert client.post("/api/grid/toggle", json={"row": 0, "col": 0}).get_json()["toggled"] is False
        assert client.post("/api/grid/toggle", json={"row": "x"}).status_code == 400

    def test_toggle_wall_ignored_in_sorting(self, client):
        assert client.post("/api/grid/toggle", json={"row": 1, "col": 1}).get_json()["toggled"] is False


class TestThemeRoute:
    def test_theme_change(self, client):
        data = client.post("/api/theme", json={"type": "THEME_CHANGE", "theme": "cupcake"}).get_json()
        assert data == {"applied": True, "theme": "cupcake", "dark": False}

    def test_other_messages_ignored(self, client):
        data = client.post("/api/theme", json={"type": "RESIZE"}).get_json()
        assert data["applied"] is False

    def test_shutdown_unsubscribes_theme(self, client):
        client.get("/api/state")
        main.shutdown()
        assert not main.SESSIONS
        assert not main.THEME.subscribed
        data = client.post("/api/theme", json={"type": "THEME_CHANGE", "theme": "cupcake"}).get_json()
        assert data["applied"] is False
