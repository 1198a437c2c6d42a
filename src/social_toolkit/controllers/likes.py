from social_toolkit.controllers.base import summaries_by_id
from social_toolkit.errors import InvalidArgumentError, NotFoundError
from social_toolkit.realtime.notifications import NotificationFanout
from social_toolkit.schemas import LikeView
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.like import Like
from social_toolkit.social_database.data_models.notification import NotificationType
from social_toolkit.social_database.data_models.post import Post
from social_toolkit.utils.pagination import Page, PageParams


class LikeController:
    def __init__(self, databases: SocialDatabases, fanout: NotificationFanout) -> None:
        self.post_db = databases.post_db
        self.like_db = databases.like_db
        self.user_db = databases.user_db
        self.fanout = fanout

    async def like(self, user_id: int, post_id: int) -> int:
        """Like the post and return its new like count. The author is notified unless they liked their own post."""
        post = await self._require_post(post_id)
        if await self.like_db.get_like(user_id, post_id):
            raise InvalidArgumentError("You already like this post")

        await self.like_db.create_like(Like(user_id=user_id, post_id=post_id))
        if post.user_id != user_id:
            self.fanout.schedule(NotificationType.LIKE, post.user_id, user_id, post_id=post_id)
        return await self.like_db.count_likes(post_id)

    async def unlike(self, user_id: int, post_id: int) -> int:
        await self._require_post(post_id)
        if not await self.like_db.delete_like(user_id, post_id):
            raise InvalidArgumentError("You have not liked this post")
        return await self.like_db.count_likes(post_id)

    async def likes(self, post_id: int, params: PageParams) -> Page[LikeView]:
        await self._require_post(post_id)
        likes = await self.like_db.get_likes_by_post(post_id, offset=params.offset, limit=params.limit)
        users = await summaries_by_id(self.user_db, [like.user_id for like in likes])
        views = [LikeView(user=users[like.user_id], created_at=like.created_at) for like in likes if like.user_id in users]
        return Page[LikeView].build(views, await self.like_db.count_likes(post_id), params)

    async def _require_post(self, post_id: int) -> Post:
        post = await self.post_db.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post
