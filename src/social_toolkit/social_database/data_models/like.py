"""
Like data model and storage interface.

A user likes a post at most once; the (user_id, post_id) pair is the key.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import Field

from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.utils.time import utc_now


class Like(SocialModel):
    user_id: int
    post_id: int
    created_at: datetime = Field(default_factory=utc_now)


class LikeDatabase(ABC):
    """Abstract repository for 'Like' records."""

    @abstractmethod
    async def create_like(self, like: Like) -> Like:
        pass

    @abstractmethod
    async def get_like(self, user_id: int, post_id: int) -> Like | None:
        pass

    @abstractmethod
    async def delete_like(self, user_id: int, post_id: int) -> bool:
        pass

    @abstractmethod
    async def get_likes_by_post(self, post_id: int, offset: int = 0, limit: int | None = None) -> list[Like]:
        pass

    @abstractmethod
    async def count_likes(self, post_id: int) -> int:
        pass

    @abstractmethod
    async def delete_likes_by_post(self, post_id: int) -> int:
        pass
