from sqlalchemy import delete, func, select

from social_toolkit.social_database.data_models.follow import Follow, FollowDatabase
from social_toolkit.social_database.sql.base import SQLRepository
from social_toolkit.social_database.sql.tables import FollowRow


class SQLFollowDatabase(SQLRepository, FollowDatabase):
    async def create_follow(self, follow: Follow) -> Follow:
        async with self.session_factory() as session:
            row = FollowRow(follower_id=follow.follower_id, followed_id=follow.followed_id, created_at=follow.created_at)
            session.add(row)
            await session.commit()
            return row.to_model()

    async def get_follow(self, follower_id: int, followed_id: int) -> Follow | None:
        async with self.session_factory() as session:
            row = await session.get(FollowRow, (follower_id, followed_id))
            return row.to_model() if row else None

    async def delete_follow(self, follower_id: int, followed_id: int) -> bool:
        statement = delete(FollowRow).where(FollowRow.follower_id == follower_id, FollowRow.followed_id == followed_id)
        async with self.session_factory() as session:
            result = await session.execute(statement)
            await session.commit()
            return result.rowcount > 0

    async def get_followers(self, user_id: int, offset: int = 0, limit: int | None = None) -> list[Follow]:
        statement = select(FollowRow).where(FollowRow.followed_id == user_id).order_by(FollowRow.created_at.desc())
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(self.paginate(statement, offset, limit))]

    async def get_following(self, user_id: int, offset: int = 0, limit: int | None = None) -> list[Follow]:
        statement = select(FollowRow).where(FollowRow.follower_id == user_id).order_by(FollowRow.created_at.desc())
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(self.paginate(statement, offset, limit))]

    async def count_followers(self, user_id: int) -> int:
        async with self.session_factory() as session:
            statement = select(func.count()).select_from(FollowRow).where(FollowRow.followed_id == user_id)
            return await session.scalar(statement) or 0

    async def count_following(self, user_id: int) -> int:
        async with self.session_factory() as session:
            statement = select(func.count()).select_from(FollowRow).where(FollowRow.follower_id == user_id)
            return await session.scalar(statement) or 0
