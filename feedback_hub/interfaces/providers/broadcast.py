from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class EventBroadcaster(ABC):
    """Interface for push channels that fan lifecycle events out to clients."""

    @abstractmethod
    async def connect(self, websocket: Any) -> str:
        """Accept a client connection and return its connection ID."""
        pass

    @abstractmethod
    def disconnect(self, connection_id: str) -> None:
        """Forget a connection and its room memberships."""
        pass

    @abstractmethod
    def join(self, connection_id: str, room: str) -> bool:
        """Add a connection to a named room."""
        pass

    @abstractmethod
    def emit(self, event: str, data: Dict[str, Any], room: Optional[str] = None) -> int:
        """Schedule delivery of an event without waiting for it.

        Returns the number of connections the event was scheduled for.
        """
        pass
