"""
Presence registry.

Process-local map from a user id to the id of that user's live connection.
A user has at most one registered connection: a later connection replaces
the earlier one, and only the currently registered connection can take the
user offline again. Every transition is broadcast to all clients as
'user_status{userId, online}'.

The map lives in this process only. Running several server instances needs a
shared presence store behind the same interface, which this class does not
provide.
"""

from loguru import logger

from social_toolkit.realtime.transport import Transport


class PresenceRegistry:
    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        self._connections: dict[int, str] = {}

    async def register(self, user_id: int, connection_id: str) -> None:
        previous = self._connections.get(user_id)
        self._connections[user_id] = connection_id
        if previous is not None and previous != connection_id:
            logger.info(f"User {user_id} reconnected, connection {previous} replaced by {connection_id}")
        else:
            logger.info(f"User {user_id} connected on {connection_id}")
        await self._broadcast_status(user_id, online=True)

    async def unregister(self, user_id: int, connection_id: str | None = None) -> bool:
        """
        Take 'user_id' offline.

        With 'connection_id', only that exact registration is removed; a stale
        connection that was already replaced leaves the user online. Returns
        whether anything was removed (and therefore broadcast).
        """
        current = self._connections.get(user_id)
        if current is None:
            return False
        if connection_id is not None and connection_id != current:
            logger.debug(f"Ignoring disconnect of replaced connection {connection_id} for user {user_id}")
            return False

        del self._connections[user_id]
        logger.info(f"User {user_id} disconnected")
        await self._broadcast_status(user_id, online=False)
        return True

    def lookup(self, user_id: int) -> str | None:
        return self._connections.get(user_id)

    def is_online(self, user_id: int) -> bool:
        return user_id in self._connections

    def online_user_ids(self) -> list[int]:
        return list(self._connections)

    async def _broadcast_status(self, user_id: int, online: bool) -> None:
        try:
            await self.transport.broadcast("user_status", {"userId": user_id, "online": online})
        except Exception:
            logger.exception(f"Failed to broadcast status of user {user_id}")
