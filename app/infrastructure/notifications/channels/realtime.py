"""Real-time sink for in-app refresh hints.

Not a delivery channel: the dispatcher publishes every non-duplicate
notification here regardless of preferences. The websocket implementation
keeps connections grouped by ``user:<id>`` room and schedules sends on the
server's event loop, since dispatch runs on the outbox worker thread.
"""

import asyncio
from abc import ABC, abstractmethod
from collections import defaultdict
from threading import Lock
from typing import Any, DefaultDict, Dict, Optional, Set

from fastapi import WebSocket

from infrastructure.logging import get_module_logger

logger = get_module_logger()

NEW_NOTIFICATION_EVENT = "notification:new"


def user_room(user_id: str) -> str:
    return f"user:{user_id}"


class RealtimeSink(ABC):
    """Best-effort live publisher."""

    @abstractmethod
    def publish(self, user_id: str, event: str, payload: Dict[str, Any]) -> None:
        pass


class WebSocketConnectionManager(RealtimeSink):
    """Manage active websocket connections grouped by user room."""

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[WebSocket]] = defaultdict(set)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._lock = Lock()

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Remember the server loop that owns the websockets."""
        self._loop = loop

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        with self._lock:
            self._connections[user_room(user_id)].add(websocket)
        logger.info("realtime_connected", user_id=user_id)

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        room = user_room(user_id)
        with self._lock:
            connections = self._connections.get(room)
            if connections is None:
                return
            connections.discard(websocket)
            if not connections:
                self._connections.pop(room, None)
        logger.info("realtime_disconnected", user_id=user_id)

    def connection_count(self, user_id: str) -> int:
        with self._lock:
            return len(self._connections.get(user_room(user_id), ()))

    async def send_to_user(self, user_id: str, message: Dict[str, Any]) -> None:
        """Send ``message`` to every active connection for ``user_id``."""
        with self._lock:
            connections = list(self._connections.get(user_room(user_id), ()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning("realtime_send_failed", user_id=user_id, error=str(e))
                self.disconnect(user_id, connection)

    def publish(self, user_id: str, event: str, payload: Dict[str, Any]) -> None:
        """Schedule a send from any thread onto the bound loop."""
        if self._loop is None or self._loop.is_closed():
            logger.debug("realtime_loop_unavailable", user_id=user_id)
            return
        if self.connection_count(user_id) == 0:
            return
        message = {"type": event, "data": payload}
        asyncio.run_coroutine_threadsafe(self.send_to_user(user_id, message), self._loop)
