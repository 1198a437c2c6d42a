from social_toolkit.controllers.base import require_user
from social_toolkit.errors import InvalidArgumentError
from social_toolkit.realtime.notifications import NotificationFanout
from social_toolkit.schemas import FollowView, UserCard
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.follow import Follow
from social_toolkit.social_database.data_models.notification import NotificationType
from social_toolkit.utils.pagination import Page, PageParams


class FollowController:
    def __init__(self, databases: SocialDatabases, fanout: NotificationFanout) -> None:
        self.user_db = databases.user_db
        self.follow_db = databases.follow_db
        self.fanout = fanout

    async def follow(self, follower_id: int, followed_id: int) -> int:
        """Create the edge and return the followed user's new follower count."""
        if follower_id == followed_id:
            raise InvalidArgumentError("You cannot follow yourself")
        await require_user(self.user_db, followed_id)
        if await self.follow_db.get_follow(follower_id, followed_id):
            raise InvalidArgumentError("You already follow this user")

        await self.follow_db.create_follow(Follow(follower_id=follower_id, followed_id=followed_id))
        self.fanout.schedule(NotificationType.FOLLOW, followed_id, follower_id)
        return await self.follow_db.count_followers(followed_id)

    async def unfollow(self, follower_id: int, followed_id: int) -> int:
        await require_user(self.user_db, followed_id)
        if not await self.follow_db.delete_follow(follower_id, followed_id):
            raise InvalidArgumentError("You do not follow this user")
        return await self.follow_db.count_followers(followed_id)

    async def followers(self, user_id: int, viewer_id: int, params: PageParams) -> Page[FollowView]:
        await require_user(self.user_db, user_id)
        edges = await self.follow_db.get_followers(user_id, offset=params.offset, limit=params.limit)
        views = await self._views([(edge.follower_id, edge) for edge in edges], viewer_id)
        return Page[FollowView].build(views, await self.follow_db.count_followers(user_id), params)

    async def following(self, user_id: int, viewer_id: int, params: PageParams) -> Page[FollowView]:
        await require_user(self.user_db, user_id)
        edges = await self.follow_db.get_following(user_id, offset=params.offset, limit=params.limit)
        views = await self._views([(edge.followed_id, edge) for edge in edges], viewer_id)
        return Page[FollowView].build(views, await self.follow_db.count_following(user_id), params)

    async def _views(self, entries: list[tuple[int, Follow]], viewer_id: int) -> list[FollowView]:
        users = {user.id: user for user in await self.user_db.get_users_by_ids([user_id for user_id, _ in entries])}
        followed_ids = set(await self.follow_db.get_followed_ids(viewer_id))
        return [
            FollowView(
                user=UserCard.from_user(users[user_id]),
                is_following=user_id in followed_ids,
                followed_at=edge.created_at,
            )
            for user_id, edge in entries
            if user_id in users
        ]
