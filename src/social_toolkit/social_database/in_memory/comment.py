from itertools import count

from social_toolkit.social_database.data_models.comment import Comment, CommentDatabase
from social_toolkit.social_database.in_memory.base import slice_page


class InMemoryCommentDatabase(CommentDatabase):
    def __init__(self) -> None:
        self.comments: dict[int, Comment] = {}
        self._ids = count(1)

    async def create_comment(self, comment: Comment) -> Comment:
        stored = comment.model_copy(update={"id": next(self._ids)})
        self.comments[stored.id] = stored
        return stored.model_copy()

    async def get_comment_by_id(self, comment_id: int) -> Comment | None:
        comment = self.comments.get(comment_id)
        return comment.model_copy() if comment else None

    async def get_comments_by_post(self, post_id: int, offset: int = 0, limit: int | None = None) -> list[Comment]:
        comments = sorted(
            (c for c in self.comments.values() if c.post_id == post_id),
            key=lambda c: (c.created_at, c.id),
            reverse=True,
        )
        return [c.model_copy() for c in slice_page(comments, offset, limit)]

    async def count_comments(self, post_id: int) -> int:
        return sum(1 for c in self.comments.values() if c.post_id == post_id)

    async def delete_comment(self, comment_id: int) -> bool:
        return self.comments.pop(comment_id, None) is not None

    async def delete_comments_by_post(self, post_id: int) -> int:
        ids = [c.id for c in self.comments.values() if c.post_id == post_id]
        for comment_id in ids:
            del self.comments[comment_id]
        return len(ids)
