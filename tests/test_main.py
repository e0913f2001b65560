from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from neon_snake.config import Settings
from neon_snake.constants import HIGH_SCORE_KEY
from neon_snake.main import build_store, create_app
from neon_snake.store import JsonFileStore, MemoryStore


def receive_until(ws, status: str, limit: int = 50) -> dict:
    for _ in range(limit):
        msg = ws.receive_json()
        if msg["type"] == "state" and msg["status"] == status:
            return msg
    raise AssertionError(f"no state with status {status!r}")


def make_client(**stored: str) -> TestClient:
    return TestClient(create_app(Settings(seed=3), store=MemoryStore(stored)))


def test_state_route_reports_idle_game() -> None:
    with make_client(**{HIGH_SCORE_KEY: "40"}) as client:
        resp = client.get("/state")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "idle"
        assert body["high_score"] == 40
        assert body["snake"] == [[10, 10], [10, 11], [10, 12]]


def test_websocket_welcome_and_initial_state() -> None:
    with make_client() as client, client.websocket_connect("/ws") as ws:
        assert ws.receive_json() == {"type": "welcome", "grid": [20, 20]}
        state = ws.receive_json()
        assert state["type"] == "state"
        assert state["status"] == "idle"


def test_websocket_start_and_pause() -> None:
    with make_client() as client, client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.receive_json()

        ws.send_json({"type": "start"})
        playing = receive_until(ws, "playing")
        assert playing["score"] == 0

        ws.send_json({"type": "pause"})
        receive_until(ws, "paused")
        assert client.get("/state").json()["status"] == "paused"


def test_websocket_direction_input_auto_starts() -> None:
    with make_client() as client, client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.receive_json()
        ws.send_json({"type": "input", "direction": "left"})
        state = receive_until(ws, "playing")
        assert state["direction"] == "left"


def test_websocket_ignores_garbage() -> None:
    with make_client() as client, client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.receive_json()
        ws.send_text("not json")
        ws.send_json(["a", "list"])
        ws.send_json({"type": "dance"})
        ws.send_json({"type": "key", "key": "Escape"})
        ws.send_json({"type": "key", "key": " "})
        state = receive_until(ws, "playing")
        assert state["direction"] == "up"


def test_build_store(tmp_path: Path) -> None:
    assert isinstance(build_store(Settings()), MemoryStore)
    store = build_store(Settings(high_score_file=str(tmp_path / "hs.json")))
    assert isinstance(store, JsonFileStore)


def test_settings_from_env() -> None:
    settings = Settings.from_env(
        {
            "NEON_SNAKE_HOST": "127.0.0.1",
            "NEON_SNAKE_PORT": "9000",
            "NEON_SNAKE_HIGHSCORE_FILE": "/tmp/hs.json",
            "NEON_SNAKE_SEED": "7",
        }
    )
    assert settings == Settings(host="127.0.0.1", port=9000, high_score_file="/tmp/hs.json", seed=7)
    assert Settings.from_env({}) == Settings()


def test_late_joiner_gets_current_state_last() -> None:
    with make_client() as client, client.websocket_connect("/ws") as first:
        first.receive_json()
        first.receive_json()
        first.send_json({"type": "start"})
        receive_until(first, "playing")
        first.send_json({"type": "pause"})
        receive_until(first, "paused")

        with client.websocket_connect("/ws") as second:
            assert second.receive_json()["type"] == "welcome"
            state = second.receive_json()
            assert state["type"] == "state"
            assert state["status"] == "paused"


def test_shutdown_stops_broadcaster() -> None:
    app = create_app(Settings(seed=3), store=MemoryStore())
    with TestClient(app):
        broadcaster = app.state.broadcaster
        assert not broadcaster.done()
    assert broadcaster.cancelled()
