from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import pytest
from fastapi import FastAPI

from social_toolkit.api.app import create_app
from social_toolkit.auth.jwt import JWTCredentialProvider
from social_toolkit.realtime.transport import Transport
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.category import Category
from social_toolkit.social_database.data_models.user import User
from social_toolkit.toolkit import SocialToolkit


class RecordingTransport(Transport):
    """Transport fake that records every delivery instead of sending it."""

    def __init__(self) -> None:
        self.emitted: list[tuple[str, dict[str, Any], str]] = []
        self.broadcasts: list[tuple[str, dict[str, Any]]] = []
        self.failing_connections: set[str] = set()

    async def emit(self, event: str, payload: dict[str, Any], connection_id: str) -> None:
        if connection_id in self.failing_connections:
            raise ConnectionError(f"connection {connection_id} is gone")
        self.emitted.append((event, payload, connection_id))

    async def broadcast(self, event: str, payload: dict[str, Any]) -> None:
        self.broadcasts.append((event, payload))

    def sent_to(self, connection_id: str, event: str | None = None) -> list[dict[str, Any]]:
        return [
            payload
            for name, payload, target in self.emitted
            if target == connection_id and (event is None or name == event)
        ]

    def events(self, event: str) -> list[tuple[dict[str, Any], str]]:
        return [(payload, target) for name, payload, target in self.emitted if name == event]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def databases() -> SocialDatabases:
    return SocialDatabases.in_memory()


@pytest.fixture
def credentials() -> JWTCredentialProvider:
    return JWTCredentialProvider(secret_key="test-secret", expire_minutes=5)


@pytest.fixture
def toolkit(databases: SocialDatabases, credentials: JWTCredentialProvider, transport: RecordingTransport) -> SocialToolkit:
    return SocialToolkit(databases, credentials, transport)


@pytest.fixture
def make_user(databases: SocialDatabases) -> Callable[..., Awaitable[User]]:
    async def _make_user(username: str, bio: str | None = None) -> User:
        return await databases.user_db.create_user(User(username=username, email=f"{username}@example.com", bio=bio))

    return _make_user


@pytest.fixture
async def category(databases: SocialDatabases) -> Category:
    return await databases.category_db.create_category(Category(name="General", description="Anything goes"))


@pytest.fixture
def app(toolkit: SocialToolkit) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await toolkit.shutdown()

    return create_app(toolkit, lifespan=lifespan)
