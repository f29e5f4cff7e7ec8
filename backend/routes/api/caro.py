"""/api/caro/ws: assistant chat socket (echo only)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from services.realtime import ConnectionHub

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/caro", tags=["caro"])


@router.websocket("/ws")
async def caro_socket(websocket: WebSocket) -> None:
    hub: ConnectionHub = websocket.app.state.connection_hub
    await hub.connect(websocket)
    try:
        while True:
            text = await websocket.receive_text()
            await hub.handle_text(websocket, text)
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)
