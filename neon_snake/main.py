"""FastAPI application — state route, WebSocket endpoint, state broadcaster."""

import asyncio
import contextlib
import json
import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from .config import Settings
from .connection_manager import ConnectionManager, build_state_msg, build_welcome_msg
from .game import GameController, snapshot_dict
from .scheduler import AsyncioScheduler
from .store import JsonFileStore, KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> KeyValueStore:
    if settings.high_score_file:
        return JsonFileStore(settings.high_score_file)
    return MemoryStore()


async def broadcast_loop(queue: asyncio.Queue, manager: ConnectionManager):
    while True:
        state = await queue.get()
        await manager.broadcast(build_state_msg(state))


def create_app(settings: Optional[Settings] = None, store: Optional[KeyValueStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    store = store if store is not None else build_store(settings)
    manager = ConnectionManager()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        rng = random.Random(settings.seed)
        controller = GameController(AsyncioScheduler(asyncio.get_running_loop()), store, rng=rng)
        updates: asyncio.Queue = asyncio.Queue()
        controller.subscribe(updates.put_nowait)
        app.state.controller = controller
        app.state.updates = updates
        broadcaster = asyncio.create_task(broadcast_loop(updates, manager))
        app.state.broadcaster = broadcaster
        logger.info("High score loaded: %d", controller.state.high_score)
        try:
            yield
        finally:
            controller.stop()
            broadcaster.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await broadcaster

    app = FastAPI(lifespan=lifespan)
    app.state.manager = manager

    @app.get("/state")
    async def get_state():
        return snapshot_dict(app.state.controller.state)

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        controller: GameController = app.state.controller
        await manager.connect(ws)
        try:
            await manager.send_personal(ws, build_welcome_msg())
            # The current snapshot goes through the broadcast queue so it
            # can never overtake states queued before this client joined.
            manager.join(ws)
            app.state.updates.put_nowait(controller.state)
            while True:
                raw = await ws.receive_text()
                handle_message(controller, raw)
        except WebSocketDisconnect:
            logger.debug("Client disconnected")
        finally:
            manager.disconnect(ws)

    return app


def handle_message(controller: GameController, raw: str):
    try:
        msg = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed message %r", raw)
        return
    if not isinstance(msg, dict):
        return

    kind = msg.get("type")
    if kind == "input":
        controller.handle_direction_request(msg.get("direction"))
    elif kind == "key":
        key = msg.get("key")
        if isinstance(key, str):
            controller.handle_key(key)
    elif kind == "pause":
        controller.handle_pause_toggle()
    elif kind == "start":
        controller.handle_start()
    else:
        logger.debug("Ignoring message type %r", kind)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = Settings.from_env()
    logger.info("Snake server starting on http://%s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
