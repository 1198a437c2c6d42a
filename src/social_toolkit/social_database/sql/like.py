from sqlalchemy import delete, func, select

from social_toolkit.social_database.data_models.like import Like, LikeDatabase
from social_toolkit.social_database.sql.base import SQLRepository
from social_toolkit.social_database.sql.tables import LikeRow


class SQLLikeDatabase(SQLRepository, LikeDatabase):
    async def create_like(self, like: Like) -> Like:
        async with self.session_factory() as session:
            row = LikeRow(user_id=like.user_id, post_id=like.post_id, created_at=like.created_at)
            session.add(row)
            await session.commit()
            return row.to_model()

    async def get_like(self, user_id: int, post_id: int) -> Like | None:
        async with self.session_factory() as session:
            row = await session.get(LikeRow, (user_id, post_id))
            return row.to_model() if row else None

    async def delete_like(self, user_id: int, post_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(delete(LikeRow).where(LikeRow.user_id == user_id, LikeRow.post_id == post_id))
            await session.commit()
            return result.rowcount > 0

    async def get_likes_by_post(self, post_id: int, offset: int = 0, limit: int | None = None) -> list[Like]:
        statement = select(LikeRow).where(LikeRow.post_id == post_id).order_by(LikeRow.created_at)
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(self.paginate(statement, offset, limit))]

    async def count_likes(self, post_id: int) -> int:
        async with self.session_factory() as session:
            return await session.scalar(select(func.count()).select_from(LikeRow).where(LikeRow.post_id == post_id)) or 0

    async def delete_likes_by_post(self, post_id: int) -> int:
        async with self.session_factory() as session:
            result = await session.execute(delete(LikeRow).where(LikeRow.post_id == post_id))
            await session.commit()
            return result.rowcount
