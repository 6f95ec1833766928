"""Message broadcasting utility for WebSocket clients."""

import asyncio
import json
import logging
from typing import Any, Dict

from websockets.asyncio.server import ServerConnection


logger = logging.getLogger(__name__)


class MessageBroadcaster:
    """
    Manages sending messages to connected WebSocket clients.

    Each client gets a bounded queue drained by its own sender task, so a
    slow client never blocks the others and messages keep their order.
    """

    def __init__(self, max_queue_size: int = 100):
        self.clients: Dict[ServerConnection, Dict[str, Any]] = {}
        self.max_queue_size = max_queue_size
        self._lock = asyncio.Lock()

    async def register(self, websocket: ServerConnection) -> None:
        """
        Register a new client and start its sender worker.

        Args:
            websocket: WebSocket connection to register
        """
        async with self._lock:
            if websocket not in self.clients:
                queue = asyncio.Queue(maxsize=self.max_queue_size)
                task = asyncio.create_task(self._client_sender_loop(websocket, queue))
                self.clients[websocket] = {
                    'queue': queue,
                    'task': task
                }
                logger.info(f"Client connected. Total clients: {len(self.clients)}")

    async def unregister(self, websocket: ServerConnection) -> None:
        """
        Unregister a client and stop its worker.

        Args:
            websocket: WebSocket connection to unregister
        """
        async with self._lock:
            client_data = self.clients.pop(websocket, None)

        if client_data is None:
            return

        task = client_data['task']
        if task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        logger.info(f"Client disconnected. Total clients: {len(self.clients)}")

    async def broadcast(self, message: Dict[str, Any]) -> None:
        """
        Queue a message for every connected client.

        Args:
            message: Message dictionary to broadcast
        """
        async with self._lock:
            if not self.clients:
                return
            queues = [data['queue'] for data in self.clients.values()]

        message_json = self._encode(message)
        if message_json is None:
            return

        for q in queues:
            try:
                q.put_nowait(message_json)
            except asyncio.QueueFull:
                logger.warning("Client queue full, dropping message")

    async def send_to_client(self, websocket: ServerConnection, message: Dict[str, Any]) -> None:
        """
        Queue a message for a single client.

        Args:
            websocket: Target WebSocket connection
            message: Message dictionary to send
        """
        message_json = self._encode(message)
        if message_json is None:
            return

        async with self._lock:
            client_data = self.clients.get(websocket)
            if client_data is None:
                logger.debug("Dropping message for unregistered client")
                return
            try:
                client_data['queue'].put_nowait(message_json)
            except asyncio.QueueFull:
                logger.warning("Client queue full, dropping specific message")

    async def _client_sender_loop(self, websocket: ServerConnection, queue: asyncio.Queue) -> None:
        """Send queued messages to one client, in order."""
        try:
            while True:
                message_json = await queue.get()
                try:
                    await websocket.send(message_json)
                except Exception as e:
                    logger.warning(f"Failed to send to client: {e}")
                    await self.unregister(websocket)
                    break
                queue.task_done()
        except asyncio.CancelledError:
            pass

    def get_client_count(self) -> int:
        return len(self.clients)

    async def close_all(self) -> None:
        """Close all client connections."""
        async with self._lock:
            websockets = list(self.clients.keys())

        for ws in websockets:
            await self.unregister(ws)
            await ws.close()

        logger.info("All clients disconnected")

    @staticmethod
    def _encode(message: Dict[str, Any]):
        try:
            return json.dumps(message, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize message: {e}")
            return None
