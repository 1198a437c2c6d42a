"""
Push transport abstractions.

A 'Transport' delivers a named event with a JSON payload either to one
connection or to every connected client. It is the only thing the realtime
components know about the wire, so tests swap in a recording fake and a
multi-instance deployment could swap in a shared channel.

'SocketIOTransport' is the production implementation over a python-socketio
'AsyncServer'.
"""

from abc import ABC, abstractmethod
from typing import Any

import socketio
from loguru import logger


class Transport(ABC):
    @abstractmethod
    async def emit(self, event: str, payload: dict[str, Any], connection_id: str) -> None:
        """Deliver 'event' to a single connection."""
        pass

    @abstractmethod
    async def broadcast(self, event: str, payload: dict[str, Any]) -> None:
        """Deliver 'event' to every connected client."""
        pass

    async def push(self, event: str, payload: dict[str, Any], connection_id: str | None) -> bool:
        """
        Best-effort delivery to 'connection_id'.

        Returns False without raising when there is no connection or the
        transport fails; delivery failures are only logged.
        """
        if connection_id is None:
            return False
        try:
            await self.emit(event, payload, connection_id)
        except Exception:
            logger.exception(f"Failed to push '{event}' to connection {connection_id}")
            return False
        return True


class SocketIOTransport(Transport):
    def __init__(self, server: socketio.AsyncServer) -> None:
        self.server = server

    async def emit(self, event: str, payload: dict[str, Any], connection_id: str) -> None:
        await self.server.emit(event, payload, to=connection_id)

    async def broadcast(self, event: str, payload: dict[str, Any]) -> None:
        await self.server.emit(event, payload)
