"""In-process WebSocket client registry for the assistant chat channel."""

from __future__ import annotations

import json
import logging
from typing import Any, Set

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class ConnectionHub:
    """Tracks connected WebSocket clients. One instance per application."""

    def __init__(self) -> None:
        self._clients: Set[WebSocket] = set()

    @property
    def client_count(self) -> int:
        return len(self._clients)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._clients.add(websocket)
        logger.info("WebSocket client connected (%d open)", len(self._clients))

    def disconnect(self, websocket: WebSocket) -> None:
        self._clients.discard(websocket)
        logger.info("WebSocket client disconnected (%d open)", len(self._clients))

    async def handle_text(self, websocket: WebSocket, text: str) -> None:
        """Echo only until the assistant backend is wired in."""
        logger.debug("Received message: %s", text)
        await websocket.send_text(f"Echo: {text}")

    async def broadcast(self, data: Any) -> int:
        """Send ``data`` as JSON to every open client. Returns the number of recipients."""
        payload = json.dumps(data)
        sent = 0
        for client in list(self._clients):
            if client.application_state != WebSocketState.CONNECTED:
                continue
            try:
                await client.send_text(payload)
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                logger.warning("Dropping WebSocket client after failed send: %s", e)
                self.disconnect(client)
                continue
            sent += 1
        return sent
