"""
Post data model and storage interface.

A post has a text 'description' and optional binary 'content' (an image or
other media). Listing and counting share the same filter arguments so the
controllers can build a page and its pagination block from one set of
criteria:

    user_ids     - only posts authored by one of these users
    category_id  - only posts filed under this category
    search       - only posts whose description contains this text

Listings are always newest first.

Concrete implementations: 'InMemoryPostDatabase', 'SQLPostDatabase'.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import Field

from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.utils.media import MediaBytes
from social_toolkit.utils.time import utc_now


class Post(SocialModel):
    id: int = 0
    user_id: int
    category_id: int
    description: str
    content: MediaBytes = None
    created_at: datetime = Field(default_factory=utc_now)


class PostDatabase(ABC):
    """Abstract repository for 'Post' records."""

    @abstractmethod
    async def create_post(self, post: Post) -> Post:
        pass

    @abstractmethod
    async def get_post_by_id(self, post_id: int) -> Post | None:
        pass

    @abstractmethod
    async def update_post(self, post: Post) -> Post:
        pass

    @abstractmethod
    async def delete_post(self, post_id: int) -> bool:
        pass

    @abstractmethod
    async def get_posts(
        self,
        user_ids: list[int] | None = None,
        category_id: int | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Post]:
        pass

    @abstractmethod
    async def count_posts(
        self,
        user_ids: list[int] | None = None,
        category_id: int | None = None,
        search: str | None = None,
    ) -> int:
        pass
