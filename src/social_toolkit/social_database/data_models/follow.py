"""
Follow relationship and storage interface.

A 'Follow' is a directed edge: 'follower_id' follows 'followed_id'. The pair
is unique and a user never follows themselves (enforced by the controller).
"""

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import Field

from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.utils.time import utc_now


class Follow(SocialModel):
    follower_id: int
    followed_id: int
    created_at: datetime = Field(default_factory=utc_now)


class FollowDatabase(ABC):
    """Abstract repository for 'Follow' edges."""

    @abstractmethod
    async def create_follow(self, follow: Follow) -> Follow:
        pass

    @abstractmethod
    async def get_follow(self, follower_id: int, followed_id: int) -> Follow | None:
        pass

    @abstractmethod
    async def delete_follow(self, follower_id: int, followed_id: int) -> bool:
        pass

    @abstractmethod
    async def get_followers(self, user_id: int, offset: int = 0, limit: int | None = None) -> list[Follow]:
        """Edges pointing at 'user_id', newest first."""
        pass

    @abstractmethod
    async def get_following(self, user_id: int, offset: int = 0, limit: int | None = None) -> list[Follow]:
        """Edges leaving 'user_id', newest first."""
        pass

    @abstractmethod
    async def count_followers(self, user_id: int) -> int:
        pass

    @abstractmethod
    async def count_following(self, user_id: int) -> int:
        pass

    async def get_follower_ids(self, user_id: int) -> list[int]:
        return [follow.follower_id for follow in await self.get_followers(user_id)]

    async def get_followed_ids(self, user_id: int) -> list[int]:
        return [follow.followed_id for follow in await self.get_following(user_id)]
