from typing import Any

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class SQLRepository:
    """Common plumbing: one short-lived session per repository call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def paginate(statement: Select[Any], offset: int = 0, limit: int | None = None) -> Select[Any]:
        if offset:
            statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        return statement
