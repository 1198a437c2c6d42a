"""
Comment data model and storage interface.

Comments belong to a post and are listed newest first. They can be removed
by their author or by the owner of the post (checked by the controller).
"""

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import Field

from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.utils.time import utc_now


class Comment(SocialModel):
    id: int = 0
    post_id: int
    user_id: int
    content: str
    created_at: datetime = Field(default_factory=utc_now)


class CommentDatabase(ABC):
    """Abstract repository for 'Comment' records."""

    @abstractmethod
    async def create_comment(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def get_comment_by_id(self, comment_id: int) -> Comment | None:
        pass

    @abstractmethod
    async def get_comments_by_post(self, post_id: int, offset: int = 0, limit: int | None = None) -> list[Comment]:
        pass

    @abstractmethod
    async def count_comments(self, post_id: int) -> int:
        pass

    @abstractmethod
    async def delete_comment(self, comment_id: int) -> bool:
        pass

    @abstractmethod
    async def delete_comments_by_post(self, post_id: int) -> int:
        pass
