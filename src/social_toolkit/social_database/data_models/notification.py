"""
Notification data model and storage interface.

Notifications are created as a side effect of the action they describe (a
like, a comment, a follow, a new post, a direct message). After creation only
the 'is_read' flag changes; owners delete them one by one or all at once.
'create_notifications' inserts a whole batch at once for fan-out to many
followers.

Concrete implementations: 'InMemoryNotificationDatabase', 'SQLNotificationDatabase'.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import StrEnum

from pydantic import Field

from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.utils.time import utc_now


class NotificationType(StrEnum):
    LIKE = "like"
    COMMENT = "comment"
    FOLLOW = "follow"
    NEW_POST = "new_post"
    MESSAGE = "message"


class Notification(SocialModel):
    """
    A notification addressed to 'user_id'.

    'from_user_id' is the user whose action triggered it and 'post_id' the
    related post, when there is one.
    """

    id: int = 0
    type: NotificationType
    user_id: int
    from_user_id: int | None = None
    post_id: int | None = None
    is_read: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class NotificationDatabase(ABC):
    """Abstract repository for 'Notification' records."""

    @abstractmethod
    async def create_notification(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def create_notifications(self, notifications: list[Notification]) -> list[Notification]:
        pass

    @abstractmethod
    async def get_notification_by_id(self, notification_id: int) -> Notification | None:
        pass

    @abstractmethod
    async def get_notifications_by_user(
        self, user_id: int, offset: int = 0, limit: int | None = None
    ) -> list[Notification]:
        pass

    @abstractmethod
    async def count_notifications(self, user_id: int, unread_only: bool = False) -> int:
        pass

    @abstractmethod
    async def mark_read(self, notification_id: int) -> Notification | None:
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: int) -> int:
        pass

    @abstractmethod
    async def delete_notification(self, notification_id: int) -> bool:
        pass

    @abstractmethod
    async def delete_notifications_by_user(self, user_id: int) -> int:
        pass

    @abstractmethod
    async def delete_notifications_by_post(self, post_id: int) -> int:
        pass
