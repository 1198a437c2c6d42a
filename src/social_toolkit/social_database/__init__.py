"""
Persistence layer.

'data_models' declares one pydantic record and one async repository ABC per
entity; 'in_memory' and 'sql' provide interchangeable implementations.
'SocialDatabases' bundles one repository of each kind so the rest of the
application takes a single object instead of eight.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from social_toolkit.social_database.data_models.category import CategoryDatabase
from social_toolkit.social_database.data_models.comment import CommentDatabase
from social_toolkit.social_database.data_models.follow import FollowDatabase
from social_toolkit.social_database.data_models.like import LikeDatabase
from social_toolkit.social_database.data_models.message import MessageDatabase
from social_toolkit.social_database.data_models.notification import NotificationDatabase
from social_toolkit.social_database.data_models.post import PostDatabase
from social_toolkit.social_database.data_models.user import UserDatabase
from social_toolkit.social_database.in_memory import (
    InMemoryCategoryDatabase,
    InMemoryCommentDatabase,
    InMemoryFollowDatabase,
    InMemoryLikeDatabase,
    InMemoryMessageDatabase,
    InMemoryNotificationDatabase,
    InMemoryPostDatabase,
    InMemoryUserDatabase,
)
from social_toolkit.social_database.sql import (
    SQLCategoryDatabase,
    SQLCommentDatabase,
    SQLFollowDatabase,
    SQLLikeDatabase,
    SQLMessageDatabase,
    SQLNotificationDatabase,
    SQLPostDatabase,
    SQLUserDatabase,
)


@dataclass
class SocialDatabases:
    user_db: UserDatabase
    category_db: CategoryDatabase
    post_db: PostDatabase
    follow_db: FollowDatabase
    like_db: LikeDatabase
    comment_db: CommentDatabase
    message_db: MessageDatabase
    notification_db: NotificationDatabase

    @classmethod
    def in_memory(cls) -> "SocialDatabases":
        return cls(
            user_db=InMemoryUserDatabase(),
            category_db=InMemoryCategoryDatabase(),
            post_db=InMemoryPostDatabase(),
            follow_db=InMemoryFollowDatabase(),
            like_db=InMemoryLikeDatabase(),
            comment_db=InMemoryCommentDatabase(),
            message_db=InMemoryMessageDatabase(),
            notification_db=InMemoryNotificationDatabase(),
        )

    @classmethod
    def sql(cls, session_factory: async_sessionmaker[AsyncSession]) -> "SocialDatabases":
        return cls(
            user_db=SQLUserDatabase(session_factory),
            category_db=SQLCategoryDatabase(session_factory),
            post_db=SQLPostDatabase(session_factory),
            follow_db=SQLFollowDatabase(session_factory),
            like_db=SQLLikeDatabase(session_factory),
            comment_db=SQLCommentDatabase(session_factory),
            message_db=SQLMessageDatabase(session_factory),
            notification_db=SQLNotificationDatabase(session_factory),
        )
