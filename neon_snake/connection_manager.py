"""WebSocket connection management and state serialization."""

import json
import logging

from fastapi import WebSocket, WebSocketDisconnect

from .constants import GRID_SIZE
from .game import snapshot_dict
from .models import GameState

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket):
        await ws.accept()

    def join(self, ws: WebSocket):
        self.connections.add(ws)

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except (WebSocketDisconnect, RuntimeError, OSError) as exc:
                logger.debug("Dropping connection after failed send: %s", exc)
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.discard(ws)

    async def send_personal(self, ws: WebSocket, message: str):
        await ws.send_text(message)


def build_state_msg(state: GameState) -> str:
    return json.dumps({"type": "state", **snapshot_dict(state)})


def build_welcome_msg() -> str:
    return json.dumps({"type": "welcome", "grid": [GRID_SIZE, GRID_SIZE]})
