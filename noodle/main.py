"""FastAPI application: HTTP route, WebSocket endpoint, game wiring."""

import asyncio
import json
import logging
import os
from contextlib import asynccontextmanager
from functools import partial

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse

from .connection_manager import (
    ConnectionManager, build_event_msg, build_frame_msg, build_state_msg, build_welcome_msg,
)
from .constants import DIRECTIONS, HOST, PORT
from .game import Game
from .options import merge_options
from .render import CanvasFrame

logger = logging.getLogger(__name__)

EVENT_NAMES = ("start", "stop", "pause", "resume", "tick", "appleEaten", "bodyHit", "wallHit", "move")

HTML_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "index.html")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.outbox = asyncio.Queue()
    pump = asyncio.create_task(pump_messages(app.state.outbox))
    yield
    if game.state.running or game.state.paused:
        game.stop(clear=False)
    pump.cancel()
    app.state.outbox = None


app = FastAPI(lifespan=lifespan)
app.state.outbox = None
manager = ConnectionManager()


def publish(message: str):
    """Queue a message for every viewer. Safe to call from inside a tick."""
    outbox = app.state.outbox
    if outbox is not None:
        outbox.put_nowait(message)


async def pump_messages(outbox: asyncio.Queue):
    while True:
        message = await outbox.get()
        await manager.broadcast(message)


def on_frame(rects: list[list]):
    publish(build_frame_msg(rects))
    publish(build_state_msg(game))


def forward_event(name: str, *args):
    publish(build_event_msg(name, *args))


options = merge_options()
settings = options.game
game = Game(
    options,
    sink=CanvasFrame(settings.width, settings.height, settings.scale, settings.border,
                     settings.background_color, on_frame=on_frame),
)
for event_name in EVENT_NAMES:
    game.events.on(event_name, partial(forward_event, event_name))


@app.get("/")
async def serve_index():
    return FileResponse(HTML_PATH, media_type="text/html")


def handle_message(msg: dict):
    kind = msg.get("type")
    if kind == "start":
        game.start()
    elif kind == "stop":
        clear = msg.get("clear", True)
        if not isinstance(clear, bool):
            logger.warning("Ignoring stop with clear %r", clear)
        elif game.state.running or game.state.paused:
            game.stop(clear=clear)
    elif kind == "pause":
        game.pause()
    elif kind == "resume":
        game.resume()
    elif kind == "input":
        d = msg.get("direction")
        if isinstance(d, str) and d in DIRECTIONS:
            game.request_direction(d)
        else:
            logger.warning("Ignoring input with direction %r", d)
    elif kind == "tick_duration":
        ms = msg.get("ms")
        if isinstance(ms, int) and not isinstance(ms, bool) and ms > 0:
            game.set_tick_duration(ms)
        else:
            logger.warning("Ignoring tick duration %r", ms)
    else:
        logger.warning("Ignoring message type %r", kind)


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws, build_welcome_msg(game))
    try:
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Ignoring malformed message %r", raw[:80])
                continue
            if not isinstance(msg, dict):
                logger.warning("Ignoring non-object message %r", raw[:80])
                continue
            handle_message(msg)
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(ws)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Snake server starting on http://localhost:%d", PORT)
    uvicorn.run(app, host=HOST, port=PORT)
