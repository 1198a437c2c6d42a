from social_toolkit.controllers.base import summaries_by_id
from social_toolkit.errors import ForbiddenError, NotFoundError
from social_toolkit.schemas import NotificationView, PostReference
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.notification import Notification
from social_toolkit.utils.pagination import Page, PageParams


class NotificationController:
    def __init__(self, databases: SocialDatabases) -> None:
        self.notification_db = databases.notification_db
        self.user_db = databases.user_db
        self.post_db = databases.post_db

    async def notifications(self, user_id: int, params: PageParams) -> Page[NotificationView]:
        notifications = await self.notification_db.get_notifications_by_user(
            user_id, offset=params.offset, limit=params.limit
        )
        senders = await summaries_by_id(
            self.user_db, [n.from_user_id for n in notifications if n.from_user_id is not None]
        )
        views = []
        for notification in notifications:
            post = await self.post_db.get_post_by_id(notification.post_id) if notification.post_id else None
            views.append(
                NotificationView(
                    **notification.model_dump(),
                    from_user=senders.get(notification.from_user_id) if notification.from_user_id else None,
                    post=PostReference.from_post(post) if post else None,
                )
            )
        return Page[NotificationView].build(views, await self.notification_db.count_notifications(user_id), params)

    async def unread_count(self, user_id: int) -> int:
        return await self.notification_db.count_notifications(user_id, unread_only=True)

    async def mark_read(self, notification_id: int, user_id: int) -> Notification:
        await self._require_owned(notification_id, user_id, "modify")
        notification = await self.notification_db.mark_read(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    async def mark_all_read(self, user_id: int) -> int:
        return await self.notification_db.mark_all_read(user_id)

    async def delete_notification(self, notification_id: int, user_id: int) -> None:
        await self._require_owned(notification_id, user_id, "delete")
        await self.notification_db.delete_notification(notification_id)

    async def delete_all(self, user_id: int) -> int:
        return await self.notification_db.delete_notifications_by_user(user_id)

    async def _require_owned(self, notification_id: int, user_id: int, action: str) -> Notification:
        notification = await self.notification_db.get_notification_by_id(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        if notification.user_id != user_id:
            raise ForbiddenError(f"You do not have permission to {action} this notification")
        return notification
