from sqlalchemy import delete, func, select, update

from social_toolkit.social_database.data_models.notification import Notification, NotificationDatabase
from social_toolkit.social_database.sql.base import SQLRepository
from social_toolkit.social_database.sql.tables import NotificationRow


def _to_row(notification: Notification) -> NotificationRow:
    return NotificationRow(
        type=notification.type.value,
        user_id=notification.user_id,
        from_user_id=notification.from_user_id,
        post_id=notification.post_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


class SQLNotificationDatabase(SQLRepository, NotificationDatabase):
    async def create_notification(self, notification: Notification) -> Notification:
        async with self.session_factory() as session:
            row = _to_row(notification)
            session.add(row)
            await session.commit()
            return row.to_model()

    async def create_notifications(self, notifications: list[Notification]) -> list[Notification]:
        if not notifications:
            return []
        async with self.session_factory() as session:
            rows = [_to_row(notification) for notification in notifications]
            session.add_all(rows)
            await session.commit()
            return [row.to_model() for row in rows]

    async def get_notification_by_id(self, notification_id: int) -> Notification | None:
        async with self.session_factory() as session:
            row = await session.get(NotificationRow, notification_id)
            return row.to_model() if row else None

    async def get_notifications_by_user(
        self, user_id: int, offset: int = 0, limit: int | None = None
    ) -> list[Notification]:
        statement = (
            select(NotificationRow)
            .where(NotificationRow.user_id == user_id)
            .order_by(NotificationRow.created_at.desc(), NotificationRow.id.desc())
        )
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(self.paginate(statement, offset, limit))]

    async def count_notifications(self, user_id: int, unread_only: bool = False) -> int:
        statement = select(func.count()).select_from(NotificationRow).where(NotificationRow.user_id == user_id)
        if unread_only:
            statement = statement.where(NotificationRow.is_read.is_(False))
        async with self.session_factory() as session:
            return await session.scalar(statement) or 0

    async def mark_read(self, notification_id: int) -> Notification | None:
        async with self.session_factory() as session:
            row = await session.get(NotificationRow, notification_id)
            if row is None:
                return None
            row.is_read = True
            await session.commit()
            return row.to_model()

    async def mark_all_read(self, user_id: int) -> int:
        statement = (
            update(NotificationRow)
            .where(NotificationRow.user_id == user_id, NotificationRow.is_read.is_(False))
            .values(is_read=True)
        )
        async with self.session_factory() as session:
            result = await session.execute(statement)
            await session.commit()
            return result.rowcount

    async def _delete_where(self, *conditions) -> int:  # noqa: ANN002
        async with self.session_factory() as session:
            result = await session.execute(delete(NotificationRow).where(*conditions))
            await session.commit()
            return result.rowcount

    async def delete_notification(self, notification_id: int) -> bool:
        return await self._delete_where(NotificationRow.id == notification_id) > 0

    async def delete_notifications_by_user(self, user_id: int) -> int:
        return await self._delete_where(NotificationRow.user_id == user_id)

    async def delete_notifications_by_post(self, post_id: int) -> int:
        return await self._delete_where(NotificationRow.post_id == post_id)
