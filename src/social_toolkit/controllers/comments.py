from loguru import logger

from social_toolkit.controllers.base import require_text, summaries_by_id
from social_toolkit.errors import ForbiddenError, NotFoundError
from social_toolkit.realtime.notifications import NotificationFanout
from social_toolkit.schemas import CommentView, UserSummary
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.comment import Comment
from social_toolkit.social_database.data_models.notification import NotificationType
from social_toolkit.social_database.data_models.post import Post
from social_toolkit.utils.pagination import Page, PageParams


class CommentController:
    def __init__(self, databases: SocialDatabases, fanout: NotificationFanout) -> None:
        self.post_db = databases.post_db
        self.comment_db = databases.comment_db
        self.user_db = databases.user_db
        self.fanout = fanout

    async def create_comment(self, post_id: int, user_id: int, content: str | None) -> CommentView:
        content = require_text(content, "Comment content is required")
        post = await self._require_post(post_id)

        comment = await self.comment_db.create_comment(Comment(post_id=post_id, user_id=user_id, content=content))
        if post.user_id != user_id:
            self.fanout.schedule(NotificationType.COMMENT, post.user_id, user_id, post_id=post_id)

        author = await self.user_db.get_user_by_id(user_id)
        summary = UserSummary.from_user(author) if author else UserSummary(id=user_id, username="Unknown")
        return CommentView.build(comment, summary)

    async def comments(self, post_id: int, params: PageParams) -> Page[CommentView]:
        await self._require_post(post_id)
        comments = await self.comment_db.get_comments_by_post(post_id, offset=params.offset, limit=params.limit)
        authors = await summaries_by_id(self.user_db, [comment.user_id for comment in comments])
        views = [
            CommentView.build(comment, authors[comment.user_id]) for comment in comments if comment.user_id in authors
        ]
        return Page[CommentView].build(views, await self.comment_db.count_comments(post_id), params)

    async def delete_comment(self, comment_id: int, user_id: int) -> None:
        """Comments can be removed by their author or by the owner of the post."""
        comment = await self.comment_db.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        post = await self.post_db.get_post_by_id(comment.post_id)
        if comment.user_id != user_id and (post is None or post.user_id != user_id):
            raise ForbiddenError("You do not have permission to delete this comment")

        await self.comment_db.delete_comment(comment_id)
        logger.debug(f"User {user_id} deleted comment {comment_id}")

    async def _require_post(self, post_id: int) -> Post:
        post = await self.post_db.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post
