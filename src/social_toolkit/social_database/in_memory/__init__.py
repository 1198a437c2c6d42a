"""
In-process repositories.

Plain dict-backed implementations of every repository ABC. They back the
test-suite and 'STORAGE_BACKEND=memory'; all data is lost on restart.
"""

from social_toolkit.social_database.in_memory.category import InMemoryCategoryDatabase
from social_toolkit.social_database.in_memory.comment import InMemoryCommentDatabase
from social_toolkit.social_database.in_memory.follow import InMemoryFollowDatabase
from social_toolkit.social_database.in_memory.like import InMemoryLikeDatabase
from social_toolkit.social_database.in_memory.message import InMemoryMessageDatabase
from social_toolkit.social_database.in_memory.notification import InMemoryNotificationDatabase
from social_toolkit.social_database.in_memory.post import InMemoryPostDatabase
from social_toolkit.social_database.in_memory.user import InMemoryUserDatabase

__all__ = [
    "InMemoryCategoryDatabase",
    "InMemoryCommentDatabase",
    "InMemoryFollowDatabase",
    "InMemoryLikeDatabase",
    "InMemoryMessageDatabase",
    "InMemoryNotificationDatabase",
    "InMemoryPostDatabase",
    "InMemoryUserDatabase",
]
