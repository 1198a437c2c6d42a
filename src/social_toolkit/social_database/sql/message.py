from sqlalchemy import and_, delete, func, or_, select, update

from social_toolkit.social_database.data_models.message import Message, MessageDatabase
from social_toolkit.social_database.sql.base import SQLRepository
from social_toolkit.social_database.sql.tables import MessageRow


def _between(user_id: int, other_user_id: int):  # noqa: ANN202
    return or_(
        and_(MessageRow.sender_id == user_id, MessageRow.receiver_id == other_user_id),
        and_(MessageRow.sender_id == other_user_id, MessageRow.receiver_id == user_id),
    )


class SQLMessageDatabase(SQLRepository, MessageDatabase):
    async def create_message(self, message: Message) -> Message:
        async with self.session_factory() as session:
            row = MessageRow(
                sender_id=message.sender_id,
                receiver_id=message.receiver_id,
                content=message.content,
                is_read=message.is_read,
                created_at=message.created_at,
            )
            session.add(row)
            await session.commit()
            return row.to_model()

    async def get_message_by_id(self, message_id: int) -> Message | None:
        async with self.session_factory() as session:
            row = await session.get(MessageRow, message_id)
            return row.to_model() if row else None

    async def update_message(self, message: Message) -> Message:
        async with self.session_factory() as session:
            row = await session.get(MessageRow, message.id)
            if row is None:
                raise KeyError(f"Message {message.id} does not exist")
            row.content = message.content
            row.is_read = row.is_read or message.is_read
            await session.commit()
            return row.to_model()

    async def delete_message(self, message_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(delete(MessageRow).where(MessageRow.id == message_id))
            await session.commit()
            return result.rowcount > 0

    async def get_messages_between(
        self, user_id: int, other_user_id: int, offset: int = 0, limit: int | None = None
    ) -> list[Message]:
        statement = (
            select(MessageRow)
            .where(_between(user_id, other_user_id))
            .order_by(MessageRow.created_at.desc(), MessageRow.id.desc())
        )
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(self.paginate(statement, offset, limit))]

    async def count_messages_between(self, user_id: int, other_user_id: int) -> int:
        async with self.session_factory() as session:
            statement = select(func.count()).select_from(MessageRow).where(_between(user_id, other_user_id))
            return await session.scalar(statement) or 0

    async def get_messages_by_user(self, user_id: int) -> list[Message]:
        statement = (
            select(MessageRow)
            .where(or_(MessageRow.sender_id == user_id, MessageRow.receiver_id == user_id))
            .order_by(MessageRow.created_at.desc(), MessageRow.id.desc())
        )
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(statement)]

    async def mark_read(self, sender_id: int, receiver_id: int) -> int:
        statement = (
            update(MessageRow)
            .where(
                MessageRow.sender_id == sender_id,
                MessageRow.receiver_id == receiver_id,
                MessageRow.is_read.is_(False),
            )
            .values(is_read=True)
        )
        async with self.session_factory() as session:
            result = await session.execute(statement)
            await session.commit()
            return result.rowcount

    async def count_unread(self, receiver_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(MessageRow)
            .where(MessageRow.receiver_id == receiver_id, MessageRow.is_read.is_(False))
        )
        async with self.session_factory() as session:
            return await session.scalar(statement) or 0
