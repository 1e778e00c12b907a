"""
Dashboard WebSocket endpoint.

Clients receive ``{"event", "data"}`` messages for every lifecycle event
and may send ``{"event": "join-dashboard", "data": <user id>}`` to join
their per-user room.
"""
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from feedback_hub.domains import JOIN_DASHBOARD, user_room

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def dashboard_socket(websocket: WebSocket):
    broadcaster = websocket.app.state.hub.broadcaster
    connection_id = await broadcaster.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except ValueError:
                logger.debug(f"Ignoring non-JSON message from {connection_id}")
                continue

            if not isinstance(message, dict):
                continue
            user_id = message.get("data")
            if message.get("event") == JOIN_DASHBOARD and isinstance(user_id, str) and user_id:
                broadcaster.join(connection_id, user_room(user_id))
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(connection_id)
