from typing import Any

from sqlalchemy import ColumnElement, delete, func, select

from social_toolkit.social_database.data_models.post import Post, PostDatabase
from social_toolkit.social_database.sql.base import SQLRepository
from social_toolkit.social_database.sql.tables import PostRow


def _post_filters(
    user_ids: list[int] | None, category_id: int | None, search: str | None
) -> list[ColumnElement[Any]]:
    conditions: list[ColumnElement[Any]] = []
    if user_ids is not None:
        conditions.append(PostRow.user_id.in_(user_ids))
    if category_id is not None:
        conditions.append(PostRow.category_id == category_id)
    if search:
        conditions.append(PostRow.description.ilike(f"%{search}%"))
    return conditions


class SQLPostDatabase(SQLRepository, PostDatabase):
    async def create_post(self, post: Post) -> Post:
        async with self.session_factory() as session:
            row = PostRow(
                user_id=post.user_id,
                category_id=post.category_id,
                description=post.description,
                content=post.content,
                created_at=post.created_at,
            )
            session.add(row)
            await session.commit()
            return row.to_model()

    async def get_post_by_id(self, post_id: int) -> Post | None:
        async with self.session_factory() as session:
            row = await session.get(PostRow, post_id)
            return row.to_model() if row else None

    async def update_post(self, post: Post) -> Post:
        async with self.session_factory() as session:
            row = await session.get(PostRow, post.id)
            if row is None:
                raise KeyError(f"Post {post.id} does not exist")
            row.category_id = post.category_id
            row.description = post.description
            row.content = post.content
            await session.commit()
            return row.to_model()

    async def delete_post(self, post_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(delete(PostRow).where(PostRow.id == post_id))
            await session.commit()
            return result.rowcount > 0

    async def get_posts(
        self,
        user_ids: list[int] | None = None,
        category_id: int | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Post]:
        statement = (
            select(PostRow)
            .where(*_post_filters(user_ids, category_id, search))
            .order_by(PostRow.created_at.desc(), PostRow.id.desc())
        )
        async with self.session_factory() as session:
            rows = await session.scalars(self.paginate(statement, offset, limit))
            return [row.to_model() for row in rows]

    async def count_posts(
        self,
        user_ids: list[int] | None = None,
        category_id: int | None = None,
        search: str | None = None,
    ) -> int:
        statement = select(func.count()).select_from(PostRow).where(*_post_filters(user_ids, category_id, search))
        async with self.session_factory() as session:
            return await session.scalar(statement) or 0
