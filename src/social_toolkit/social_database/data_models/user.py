"""
User data model and storage interface.

'User' is the full account record. The password hash lives on the record so
the credential provider can verify logins, but it is excluded from every
serialization. Public projections ('UserSummary', 'UserProfile') are built by
the controllers in 'social_toolkit.schemas'.

Concrete implementations: 'InMemoryUserDatabase', 'SQLUserDatabase'.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import Field

from social_toolkit.social_database.data_models.base import SocialModel
from social_toolkit.utils.media import MediaBytes
from social_toolkit.utils.time import utc_now


class User(SocialModel):
    """A registered account. 'id' is 0 until the record has been persisted."""

    id: int = 0
    username: str
    email: str
    password_hash: str = Field(default="", exclude=True, repr=False)
    bio: str | None = None
    profile_pic: MediaBytes = None
    created_at: datetime = Field(default_factory=utc_now)


class UserDatabase(ABC):
    """Abstract repository for 'User' records."""

    @abstractmethod
    async def create_user(self, user: User) -> User:
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> User | None:
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User | None:
        pass

    @abstractmethod
    async def get_users_by_ids(self, user_ids: list[int]) -> list[User]:
        pass

    @abstractmethod
    async def update_user(self, user: User) -> User:
        pass

    @abstractmethod
    async def search_users(self, query: str, limit: int) -> list[User]:
        """Users whose username or email contains 'query' (case-insensitive)."""
        pass

    @abstractmethod
    async def list_users(self, exclude_user_id: int, search: str | None = None) -> list[User]:
        """Every user except 'exclude_user_id', optionally filtered on username or bio."""
        pass
