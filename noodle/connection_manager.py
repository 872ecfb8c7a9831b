"""WebSocket connection management and state serialization."""

import json
import logging

from fastapi import WebSocket

from .game import Game

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket, greeting: str):
        # Greet before registering so the greeting is always the first message.
        await ws.accept()
        await ws.send_text(greeting)
        self.connections.add(ws)

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except Exception:
                disconnected.append(ws)
        for ws in disconnected:
            logger.info("Dropping viewer after failed send")
            self.connections.discard(ws)


def build_welcome_msg(game: Game) -> str:
    settings = game.options.game
    return json.dumps({
        "type": "welcome",
        "grid": [settings.width, settings.height],
        "scale": settings.scale,
        "background_color": settings.background_color,
        "state": game.get_state(),
    })


def build_frame_msg(rects: list[list]) -> str:
    return json.dumps({"type": "frame", "rects": rects})


def build_event_msg(name: str, *args) -> str:
    payload = [list(a) if isinstance(a, tuple) else a for a in args]
    return json.dumps({"type": "event", "name": name, "args": payload})


def build_state_msg(game: Game) -> str:
    return json.dumps({"type": "state", **game.get_state()})
