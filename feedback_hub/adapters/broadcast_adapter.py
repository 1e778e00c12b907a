"""
Push channel adapters for Feedback Hub.

These adapters implement the EventBroadcaster interface. Delivery is
best-effort and at-most-once: nothing is stored, acknowledged or replayed.
"""
import asyncio
import logging
import uuid
from collections import defaultdict
from typing import Any, Dict, Optional, Set

from fastapi.encoders import jsonable_encoder

from feedback_hub.interfaces.providers.broadcast import EventBroadcaster

logger = logging.getLogger(__name__)

DEFAULT_SEND_TIMEOUT_SECONDS = 5.0


class WebSocketBroadcaster(EventBroadcaster):
    """Process-local registry of dashboard WebSocket connections.

    Messages are sent as JSON objects of the form
    ``{"event": <name>, "data": <payload>}``.
    """

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT_SECONDS):
        self.send_timeout = send_timeout
        self._connections: Dict[str, Any] = {}
        self._rooms: Dict[str, Set[str]] = defaultdict(set)
        self._pending: Set[asyncio.Task] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def room_members(self, room: str) -> Set[str]:
        return set(self._rooms.get(room, ()))

    async def connect(self, websocket: Any) -> str:
        connection_id = str(uuid.uuid4())
        # Registered before the handshake completes so no event is missed
        self._connections[connection_id] = websocket
        try:
            await websocket.accept()
        except Exception:
            self._connections.pop(connection_id, None)
            raise
        logger.info(f"Dashboard client connected: {connection_id}")
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        if self._connections.pop(connection_id, None) is None:
            return
        for room in list(self._rooms):
            self._rooms[room].discard(connection_id)
            if not self._rooms[room]:
                del self._rooms[room]
        logger.info(f"Dashboard client disconnected: {connection_id}")

    def join(self, connection_id: str, room: str) -> bool:
        if connection_id not in self._connections:
            return False
        self._rooms[room].add(connection_id)
        logger.info(f"Connection {connection_id} joined room {room}")
        return True

    def emit(self, event: str, data: Dict[str, Any], room: Optional[str] = None) -> int:
        if room is None:
            targets = list(self._connections)
        else:
            targets = [cid for cid in self._rooms.get(room, ()) if cid in self._connections]
        if not targets:
            return 0

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running event loop; dropping '{event}' event")
            return 0

        message = {"event": event, "data": jsonable_encoder(data)}
        for connection_id in targets:
            task = loop.create_task(self._send(connection_id, message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        return len(targets)

    async def flush(self) -> None:
        """Wait for every scheduled send to finish."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _send(self, connection_id: str, message: Dict[str, Any]) -> None:
        websocket = self._connections.get(connection_id)
        if websocket is None:
            return
        try:
            await asyncio.wait_for(websocket.send_json(message), timeout=self.send_timeout)
        except Exception as e:
            logger.warning(
                f"Dropping connection {connection_id} after failed '{message['event']}' send: {e}"
            )
            self.disconnect(connection_id)
            try:
                await websocket.close(code=1011)
            except Exception as close_error:
                logger.debug(f"Closing connection {connection_id} failed: {close_error}")


class NullBroadcaster(EventBroadcaster):
    """Null implementation of the EventBroadcaster interface.

    This broadcaster satisfies the interface but delivers nothing.
    It's useful when no push channel is needed or when running tests.
    """

    async def connect(self, websocket: Any) -> str:
        await websocket.accept()
        return str(uuid.uuid4())

    def disconnect(self, connection_id: str) -> None:
        pass

    def join(self, connection_id: str, room: str) -> bool:
        return False

    def emit(self, event: str, data: Dict[str, Any], room: Optional[str] = None) -> int:
        return 0
