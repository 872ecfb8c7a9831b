"""Tests for the FastAPI front end."""

import logging

import pytest
from fastapi.testclient import TestClient

from noodle import main


def receive_until(ws, predicate, limit=1000):
    for _ in range(limit):
        msg = ws.receive_json()
        if predicate(msg):
            return msg
    raise AssertionError("expected message never arrived")


def is_event(name):
    return lambda msg: msg["type"] == "event" and msg["name"] == name


@pytest.fixture
def client():
    with TestClient(main.app) as client:
        yield client


class TestHttp:
    """Tests for plain HTTP routes."""

    def test_index_is_served(self, client):
        """GET / returns the page."""
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "<canvas" in response.text


class TestWebSocket:
    """Tests for the /ws endpoint."""

    def test_welcome_describes_the_grid(self, client):
        """The first message carries the grid size and scale."""
        with client.websocket_connect("/ws") as ws:
            welcome = ws.receive_json()
        assert welcome["type"] == "welcome"
        assert welcome["grid"] == [30, 20]
        assert welcome["scale"] == 10
        assert "ticks" in welcome["state"]

    def test_start_streams_frames_and_ticks(self, client):
        """Starting a game sends frames, state and tick events."""
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "start"})

            frame = receive_until(ws, lambda m: m["type"] == "frame")
            assert frame["rects"][0] == [0, 0, 300, 200, "#000000"]
            receive_until(ws, is_event("start"))
            tick = receive_until(ws, is_event("tick"))
            assert tick["args"][0] >= 1
            state = receive_until(ws, lambda m: m["type"] == "state" and m["ticks"] >= 1)
            assert state["running"] is True

            ws.send_json({"type": "stop"})
            receive_until(ws, is_event("stop"))
        assert main.game.state.stopped is True

    def test_input_turns_the_snake(self, client):
        """Direction input is forwarded to the engine and announced."""
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "start"})
            receive_until(ws, is_event("start"))
            ws.send_json({"type": "input", "direction": "up"})
            ws.send_json({"type": "input", "direction": "left"})
            move = receive_until(ws, is_event("move"))
            assert move["args"][0] in ("up", "left")
            assert len(move["args"][1]) == 2
            ws.send_json({"type": "stop"})
            receive_until(ws, is_event("stop"))

    def test_pause_resume_and_tick_duration(self, client):
        """Lifecycle commands reach the engine."""
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "start"})
            receive_until(ws, is_event("start"))
            ws.send_json({"type": "tick_duration", "ms": 40})
            ws.send_json({"type": "pause"})
            receive_until(ws, is_event("pause"))
            ws.send_json({"type": "resume"})
            receive_until(ws, is_event("resume"))
            receive_until(ws, lambda m: m["type"] == "state" and m["tick_duration"] == 40)
            ws.send_json({"type": "stop"})
            receive_until(ws, is_event("stop"))

    def test_stop_requires_a_real_bool_for_clear(self, client, caplog):
        """A string "false" for clear is refused and the game keeps running."""
        with caplog.at_level(logging.WARNING, logger="noodle.main"):
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()
                ws.send_json({"type": "start"})
                receive_until(ws, is_event("start"))
                ws.send_json({"type": "stop", "clear": "false"})
                ws.send_json({"type": "pause"})
                receive_until(ws, is_event("pause"))
                assert main.game.state.stopped is False
                ws.send_json({"type": "stop", "clear": False})
                receive_until(ws, is_event("stop"))
        assert "Ignoring stop with clear 'false'" in caplog.text
        assert main.game.state.stopped is True

    def test_bad_messages_are_ignored(self, client, caplog):
        """Malformed messages are logged and the session keeps going."""
        with caplog.at_level(logging.WARNING, logger="noodle.main"):
            with client.websocket_connect("/ws") as ws:
                ws.receive_json()
                ws.send_text("not json")
                ws.send_text("[1, 2]")
                ws.send_json({"type": "bogus"})
                ws.send_json({"type": "input", "direction": ["up"]})
                ws.send_json({"type": "tick_duration", "ms": 0})
                ws.send_json({"type": "start"})
                receive_until(ws, is_event("start"))
                ws.send_json({"type": "stop"})
                receive_until(ws, is_event("stop"))
        assert "malformed" in caplog.text
        assert "bogus" in caplog.text
