from social_toolkit.social_database.data_models.follow import Follow, FollowDatabase
from social_toolkit.social_database.in_memory.base import slice_page


class InMemoryFollowDatabase(FollowDatabase):
    def __init__(self) -> None:
        self.follows: dict[tuple[int, int], Follow] = {}

    async def create_follow(self, follow: Follow) -> Follow:
        key = (follow.follower_id, follow.followed_id)
        if key in self.follows:
            raise ValueError(f"User {follow.follower_id} already follows {follow.followed_id}")
        self.follows[key] = follow.model_copy()
        return follow

    async def get_follow(self, follower_id: int, followed_id: int) -> Follow | None:
        follow = self.follows.get((follower_id, followed_id))
        return follow.model_copy() if follow else None

    async def delete_follow(self, follower_id: int, followed_id: int) -> bool:
        return self.follows.pop((follower_id, followed_id), None) is not None

    def _newest_first(self, follows: list[Follow]) -> list[Follow]:
        return sorted(follows, key=lambda f: f.created_at, reverse=True)

    async def get_followers(self, user_id: int, offset: int = 0, limit: int | None = None) -> list[Follow]:
        follows = self._newest_first([f for f in self.follows.values() if f.followed_id == user_id])
        return [f.model_copy() for f in slice_page(follows, offset, limit)]

    async def get_following(self, user_id: int, offset: int = 0, limit: int | None = None) -> list[Follow]:
        follows = self._newest_first([f for f in self.follows.values() if f.follower_id == user_id])
        return [f.model_copy() for f in slice_page(follows, offset, limit)]

    async def count_followers(self, user_id: int) -> int:
        return sum(1 for f in self.follows.values() if f.followed_id == user_id)

    async def count_following(self, user_id: int) -> int:
        return sum(1 for f in self.follows.values() if f.follower_id == user_id)
