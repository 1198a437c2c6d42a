from itertools import count

from social_toolkit.social_database.data_models.notification import Notification, NotificationDatabase
from social_toolkit.social_database.in_memory.base import slice_page


class InMemoryNotificationDatabase(NotificationDatabase):
    def __init__(self) -> None:
        self.notifications: dict[int, Notification] = {}
        self._ids = count(1)

    async def create_notification(self, notification: Notification) -> Notification:
        stored = notification.model_copy(update={"id": next(self._ids)})
        self.notifications[stored.id] = stored
        return stored.model_copy()

    async def create_notifications(self, notifications: list[Notification]) -> list[Notification]:
        return [await self.create_notification(notification) for notification in notifications]

    async def get_notification_by_id(self, notification_id: int) -> Notification | None:
        notification = self.notifications.get(notification_id)
        return notification.model_copy() if notification else None

    async def get_notifications_by_user(
        self, user_id: int, offset: int = 0, limit: int | None = None
    ) -> list[Notification]:
        notifications = sorted(
            (n for n in self.notifications.values() if n.user_id == user_id),
            key=lambda n: (n.created_at, n.id),
            reverse=True,
        )
        return [n.model_copy() for n in slice_page(notifications, offset, limit)]

    async def count_notifications(self, user_id: int, unread_only: bool = False) -> int:
        return sum(
            1 for n in self.notifications.values() if n.user_id == user_id and not (unread_only and n.is_read)
        )

    async def mark_read(self, notification_id: int) -> Notification | None:
        notification = self.notifications.get(notification_id)
        if notification is None:
            return None
        notification.is_read = True
        return notification.model_copy()

    async def mark_all_read(self, user_id: int) -> int:
        changed = 0
        for notification in self.notifications.values():
            if notification.user_id == user_id and not notification.is_read:
                notification.is_read = True
                changed += 1
        return changed

    async def delete_notification(self, notification_id: int) -> bool:
        return self.notifications.pop(notification_id, None) is not None

    def _delete_where(self, predicate) -> int:  # noqa: ANN001
        ids = [n.id for n in self.notifications.values() if predicate(n)]
        for notification_id in ids:
            del self.notifications[notification_id]
        return len(ids)

    async def delete_notifications_by_user(self, user_id: int) -> int:
        return self._delete_where(lambda n: n.user_id == user_id)

    async def delete_notifications_by_post(self, post_id: int) -> int:
        return self._delete_where(lambda n: n.post_id == post_id)
