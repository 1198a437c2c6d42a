"""
Posts and feeds.

'PostController' creates, lists, updates and deletes posts. Every listed post
is decorated with its author, category, like and comment counts and whether
the viewer has liked it. Creating a post schedules a bulk 'new_post'
notification to the author's followers; deleting one removes its comments,
likes and notifications with it.
"""

from loguru import logger

from social_toolkit.controllers.base import require_text, require_user, summaries_by_id
from social_toolkit.errors import ForbiddenError, InvalidArgumentError, NotFoundError
from social_toolkit.realtime.notifications import NotificationFanout
from social_toolkit.schemas import CommentView, PostDetail, PostView, UserSummary
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.category import Category
from social_toolkit.social_database.data_models.notification import NotificationType
from social_toolkit.social_database.data_models.post import Post
from social_toolkit.utils.pagination import Page, PageParams

DEFAULT_PAGE_SIZE = 10


class PostController:
    def __init__(self, databases: SocialDatabases, fanout: NotificationFanout) -> None:
        self.post_db = databases.post_db
        self.user_db = databases.user_db
        self.category_db = databases.category_db
        self.follow_db = databases.follow_db
        self.like_db = databases.like_db
        self.comment_db = databases.comment_db
        self.notification_db = databases.notification_db
        self.fanout = fanout

    async def create_post(
        self, user_id: int, description: str | None, category_id: int | None, content: bytes | None = None
    ) -> PostView:
        description = require_text(description, "Description is required")
        if category_id is None:
            raise InvalidArgumentError("Category is required")
        await self._require_category(category_id)
        author = await require_user(self.user_db, user_id)

        post = await self.post_db.create_post(
            Post(user_id=user_id, category_id=category_id, description=description, content=content or None)
        )
        logger.info(f"User {user_id} created post {post.id}")

        follower_ids = await self.follow_db.get_follower_ids(user_id)
        self.fanout.schedule_many(
            NotificationType.NEW_POST, follower_ids, user_id, post_id=post.id, from_username=author.username
        )
        return (await self._views([post], viewer_id=user_id))[0]

    async def recent_posts(self, viewer_id: int, params: PageParams) -> Page[PostView]:
        return await self._page(viewer_id, params)

    async def feed(self, viewer_id: int, params: PageParams) -> Page[PostView]:
        followed_ids = await self.follow_db.get_followed_ids(viewer_id)
        if not followed_ids:
            return await self._page(viewer_id, params)
        return await self._page(viewer_id, params, user_ids=followed_ids)

    async def posts_by_category(self, category_id: int, viewer_id: int, params: PageParams) -> Page[PostView]:
        await self._require_category(category_id)
        return await self._page(viewer_id, params, category_id=category_id)

    async def search_posts(self, query: str | None, viewer_id: int, params: PageParams) -> Page[PostView]:
        query = require_text(query, "A search term is required")
        return await self._page(viewer_id, params, search=query)

    async def posts_by_user(self, user_id: int, viewer_id: int, params: PageParams) -> Page[PostView]:
        await require_user(self.user_db, user_id)
        return await self._page(viewer_id, params, user_ids=[user_id])

    async def get_post(self, post_id: int, viewer_id: int) -> PostDetail:
        post = await self._require_post(post_id)
        view = (await self._views([post], viewer_id))[0]
        comments = await self.comment_db.get_comments_by_post(post_id)
        authors = await summaries_by_id(self.user_db, [comment.user_id for comment in comments])
        return PostDetail(
            **view.model_dump(),
            comments=[
                CommentView.build(comment, authors.get(comment.user_id) or _unknown_user(comment.user_id))
                for comment in comments
            ],
        )

    async def update_post(
        self,
        post_id: int,
        user_id: int,
        description: str | None = None,
        category_id: int | None = None,
        content: bytes | None = None,
    ) -> PostView:
        post = await self._require_post(post_id)
        if post.user_id != user_id:
            raise ForbiddenError("You do not have permission to edit this post")

        changes: dict = {}
        if category_id is not None:
            await self._require_category(category_id)
            changes["category_id"] = category_id
        if description:
            changes["description"] = description
        if content:
            changes["content"] = content

        updated = await self.post_db.update_post(post.model_copy(update=changes))
        return (await self._views([updated], viewer_id=user_id))[0]

    async def delete_post(self, post_id: int, user_id: int) -> None:
        post = await self._require_post(post_id)
        if post.user_id != user_id:
            raise ForbiddenError("You do not have permission to delete this post")

        await self.comment_db.delete_comments_by_post(post_id)
        await self.like_db.delete_likes_by_post(post_id)
        await self.notification_db.delete_notifications_by_post(post_id)
        await self.post_db.delete_post(post_id)
        logger.info(f"User {user_id} deleted post {post_id}")

    async def _page(
        self,
        viewer_id: int,
        params: PageParams,
        user_ids: list[int] | None = None,
        category_id: int | None = None,
        search: str | None = None,
    ) -> Page[PostView]:
        posts = await self.post_db.get_posts(
            user_ids=user_ids, category_id=category_id, search=search, offset=params.offset, limit=params.limit
        )
        total = await self.post_db.count_posts(user_ids=user_ids, category_id=category_id, search=search)
        return Page[PostView].build(await self._views(posts, viewer_id), total, params)

    async def _views(self, posts: list[Post], viewer_id: int) -> list[PostView]:
        authors = await summaries_by_id(self.user_db, [post.user_id for post in posts])
        categories: dict[int, Category | None] = {}
        views = []
        for post in posts:
            if post.category_id not in categories:
                categories[post.category_id] = await self.category_db.get_category_by_id(post.category_id)
            views.append(
                PostView(
                    id=post.id,
                    description=post.description,
                    content=post.content,
                    created_at=post.created_at,
                    user_id=post.user_id,
                    category_id=post.category_id,
                    user=authors.get(post.user_id) or _unknown_user(post.user_id),
                    category=categories[post.category_id],
                    comment_count=await self.comment_db.count_comments(post.id),
                    like_count=await self.like_db.count_likes(post.id),
                    has_liked=await self.like_db.get_like(viewer_id, post.id) is not None,
                )
            )
        return views

    async def _require_post(self, post_id: int) -> Post:
        post = await self.post_db.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def _require_category(self, category_id: int) -> Category:
        category = await self.category_db.get_category_by_id(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category


def _unknown_user(user_id: int) -> UserSummary:
    return UserSummary(id=user_id, username="Unknown")
