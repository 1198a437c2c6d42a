from sqlalchemy import or_, select

from social_toolkit.social_database.data_models.user import User, UserDatabase
from social_toolkit.social_database.sql.base import SQLRepository
from social_toolkit.social_database.sql.tables import UserRow


class SQLUserDatabase(SQLRepository, UserDatabase):
    async def create_user(self, user: User) -> User:
        async with self.session_factory() as session:
            row = UserRow(
                username=user.username,
                email=user.email,
                password_hash=user.password_hash,
                bio=user.bio,
                profile_pic=user.profile_pic,
                created_at=user.created_at,
            )
            session.add(row)
            await session.commit()
            return row.to_model()

    async def get_user_by_id(self, user_id: int) -> User | None:
        async with self.session_factory() as session:
            row = await session.get(UserRow, user_id)
            return row.to_model() if row else None

    async def _get_one_where(self, *conditions) -> User | None:  # noqa: ANN002
        async with self.session_factory() as session:
            row = await session.scalar(select(UserRow).where(*conditions))
            return row.to_model() if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._get_one_where(UserRow.email == email)

    async def get_user_by_username(self, username: str) -> User | None:
        return await self._get_one_where(UserRow.username == username)

    async def get_users_by_ids(self, user_ids: list[int]) -> list[User]:
        if not user_ids:
            return []
        async with self.session_factory() as session:
            rows = await session.scalars(select(UserRow).where(UserRow.id.in_(user_ids)))
            by_id = {row.id: row.to_model() for row in rows}
        return [by_id[user_id] for user_id in dict.fromkeys(user_ids) if user_id in by_id]

    async def update_user(self, user: User) -> User:
        async with self.session_factory() as session:
            row = await session.get(UserRow, user.id)
            if row is None:
                raise KeyError(f"User {user.id} does not exist")
            row.username = user.username
            row.email = user.email
            row.password_hash = user.password_hash
            row.bio = user.bio
            row.profile_pic = user.profile_pic
            await session.commit()
            return row.to_model()

    async def search_users(self, query: str, limit: int) -> list[User]:
        pattern = f"%{query}%"
        statement = (
            select(UserRow)
            .where(or_(UserRow.username.ilike(pattern), UserRow.email.ilike(pattern)))
            .order_by(UserRow.id)
            .limit(limit)
        )
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(statement)]

    async def list_users(self, exclude_user_id: int, search: str | None = None) -> list[User]:
        statement = select(UserRow).where(UserRow.id != exclude_user_id).order_by(UserRow.id)
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            statement = statement.where(or_(UserRow.username.ilike(pattern), UserRow.bio.ilike(pattern)))
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(statement)]
