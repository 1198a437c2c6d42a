"""
Relational repositories built on the SQLAlchemy 2.0 async ORM.

'create_engine' / 'create_session_factory' / 'create_tables' set up the
database; every 'SQL*Database' takes the session factory and opens one short
session per call.
"""

from social_toolkit.social_database.sql.category import SQLCategoryDatabase
from social_toolkit.social_database.sql.comment import SQLCommentDatabase
from social_toolkit.social_database.sql.follow import SQLFollowDatabase
from social_toolkit.social_database.sql.like import SQLLikeDatabase
from social_toolkit.social_database.sql.message import SQLMessageDatabase
from social_toolkit.social_database.sql.notification import SQLNotificationDatabase
from social_toolkit.social_database.sql.post import SQLPostDatabase
from social_toolkit.social_database.sql.session import create_engine, create_session_factory, create_tables
from social_toolkit.social_database.sql.user import SQLUserDatabase

__all__ = [
    "SQLCategoryDatabase",
    "SQLCommentDatabase",
    "SQLFollowDatabase",
    "SQLLikeDatabase",
    "SQLMessageDatabase",
    "SQLNotificationDatabase",
    "SQLPostDatabase",
    "SQLUserDatabase",
    "create_engine",
    "create_session_factory",
    "create_tables",
]
