from sqlalchemy import delete, func, select

from social_toolkit.social_database.data_models.comment import Comment, CommentDatabase
from social_toolkit.social_database.sql.base import SQLRepository
from social_toolkit.social_database.sql.tables import CommentRow


class SQLCommentDatabase(SQLRepository, CommentDatabase):
    async def create_comment(self, comment: Comment) -> Comment:
        async with self.session_factory() as session:
            row = CommentRow(
                post_id=comment.post_id, user_id=comment.user_id, content=comment.content, created_at=comment.created_at
            )
            session.add(row)
            await session.commit()
            return row.to_model()

    async def get_comment_by_id(self, comment_id: int) -> Comment | None:
        async with self.session_factory() as session:
            row = await session.get(CommentRow, comment_id)
            return row.to_model() if row else None

    async def get_comments_by_post(self, post_id: int, offset: int = 0, limit: int | None = None) -> list[Comment]:
        statement = (
            select(CommentRow)
            .where(CommentRow.post_id == post_id)
            .order_by(CommentRow.created_at.desc(), CommentRow.id.desc())
        )
        async with self.session_factory() as session:
            return [row.to_model() for row in await session.scalars(self.paginate(statement, offset, limit))]

    async def count_comments(self, post_id: int) -> int:
        async with self.session_factory() as session:
            statement = select(func.count()).select_from(CommentRow).where(CommentRow.post_id == post_id)
            return await session.scalar(statement) or 0

    async def delete_comment(self, comment_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(delete(CommentRow).where(CommentRow.id == comment_id))
            await session.commit()
            return result.rowcount > 0

    async def delete_comments_by_post(self, post_id: int) -> int:
        async with self.session_factory() as session:
            result = await session.execute(delete(CommentRow).where(CommentRow.post_id == post_id))
            await session.commit()
            return result.rowcount
