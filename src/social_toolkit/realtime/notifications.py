"""
Notification fan-out.

'NotificationFanout' persists a notification for an action and, when the
target user is connected, pushes a 'new_notification' event to them. Persisted
rows are the source of truth; the push is a best-effort hint and is simply
skipped for offline users (they see the row next time they list
notifications).

Triggering actions never wait for delivery and never fail because of it:

    'notify' / 'notify_many'     - do the work inline and swallow (log) every error.
    'schedule' / 'schedule_many' - run the same work as a tracked background task.
    'drain'                      - await every task still outstanding.
"""

import asyncio
from collections.abc import Iterable

from loguru import logger

from social_toolkit.realtime.presence import PresenceRegistry
from social_toolkit.realtime.transport import Transport
from social_toolkit.social_database.data_models.notification import (
    Notification,
    NotificationDatabase,
    NotificationType,
)
from social_toolkit.social_database.data_models.user import UserDatabase

DEFAULT_USERNAME = "User"

TEMPLATES: dict[str, str] = {
    NotificationType.LIKE: "{name} liked your post",
    NotificationType.COMMENT: "{name} commented on your post",
    NotificationType.FOLLOW: "{name} started following you",
    NotificationType.NEW_POST: "{name} made a new post",
    NotificationType.MESSAGE: "{name} sent you a message",
}
FALLBACK_TEMPLATE = "New notification from {name}"


def render_message(notification_type: str, name: str) -> str:
    return TEMPLATES.get(notification_type, FALLBACK_TEMPLATE).format(name=name)


class NotificationFanout:
    def __init__(
        self,
        notification_db: NotificationDatabase,
        user_db: UserDatabase,
        registry: PresenceRegistry,
        transport: Transport,
    ) -> None:
        self.notification_db = notification_db
        self.user_db = user_db
        self.registry = registry
        self.transport = transport
        self._tasks: set[asyncio.Task[None]] = set()

    async def notify(
        self,
        type: NotificationType,
        user_id: int,
        from_user_id: int,
        post_id: int | None = None,
        from_username: str | None = None,
    ) -> None:
        try:
            await self.notification_db.create_notification(
                Notification(type=type, user_id=user_id, from_user_id=from_user_id, post_id=post_id)
            )
            name = from_username or await self._resolve_username(from_user_id)
            await self._push(type, user_id, from_user_id, name, post_id)
        except Exception:
            logger.exception(f"Failed to deliver '{type}' notification to user {user_id}")

    async def notify_many(
        self,
        type: NotificationType,
        user_ids: Iterable[int],
        from_user_id: int,
        post_id: int | None = None,
        from_username: str | None = None,
    ) -> None:
        targets = list(dict.fromkeys(user_ids))
        if not targets:
            return
        try:
            await self.notification_db.create_notifications(
                [
                    Notification(type=type, user_id=user_id, from_user_id=from_user_id, post_id=post_id)
                    for user_id in targets
                ]
            )
            name = from_username or await self._resolve_username(from_user_id)
            delivered = 0
            for user_id in targets:
                delivered += await self._push(type, user_id, from_user_id, name, post_id)
            logger.debug(f"'{type}' notification stored for {len(targets)} users, pushed to {delivered}")
        except Exception:
            logger.exception(f"Failed to deliver '{type}' notifications to {len(targets)} users")

    def schedule(
        self,
        type: NotificationType,
        user_id: int,
        from_user_id: int,
        post_id: int | None = None,
        from_username: str | None = None,
    ) -> asyncio.Task[None]:
        return self._spawn(self.notify(type, user_id, from_user_id, post_id, from_username))

    def schedule_many(
        self,
        type: NotificationType,
        user_ids: Iterable[int],
        from_user_id: int,
        post_id: int | None = None,
        from_username: str | None = None,
    ) -> asyncio.Task[None]:
        return self._spawn(self.notify_many(type, list(user_ids), from_user_id, post_id, from_username))

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _spawn(self, coroutine) -> asyncio.Task[None]:  # noqa: ANN001
        task = asyncio.get_running_loop().create_task(coroutine)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _resolve_username(self, user_id: int) -> str:
        user = await self.user_db.get_user_by_id(user_id)
        return user.username if user else DEFAULT_USERNAME

    async def _push(self, type: str, user_id: int, from_user_id: int, name: str, post_id: int | None) -> bool:
        connection_id = self.registry.lookup(user_id)
        if connection_id is None:
            return False
        payload = {
            "type": str(type),
            "fromUserId": from_user_id,
            "fromUsername": name,
            "postId": post_id,
            "message": render_message(type, name),
        }
        return await self.transport.push("new_notification", payload, connection_id)
