"""
Server entry point.

'build_toolkit' wires the toolkit for the configured storage backend,
'create_asgi_app' mounts the FastAPI application and the Socket.IO server on
one ASGI app, and 'main' runs it under uvicorn.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import socketio
import uvicorn
from fastapi import FastAPI
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine

from social_toolkit.api.app import create_app
from social_toolkit.auth.jwt import JWTCredentialProvider
from social_toolkit.realtime.transport import SocketIOTransport
from social_toolkit.settings import Settings
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.sql import create_engine, create_session_factory, create_tables
from social_toolkit.toolkit import SocialToolkit
from social_toolkit.utils.logging import configure_logging


def build_toolkit(settings: Settings, server: socketio.AsyncServer) -> tuple[SocialToolkit, AsyncEngine | None]:
    """Return the toolkit and, for the SQL backend, the engine whose tables must exist before serving."""
    engine = None
    if settings.STORAGE_BACKEND == "memory":
        databases = SocialDatabases.in_memory()
    else:
        engine = create_engine(settings.DATABASE_URL)
        databases = SocialDatabases.sql(create_session_factory(engine))

    credentials = JWTCredentialProvider(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    return SocialToolkit(databases, credentials, SocketIOTransport(server)), engine


def create_asgi_app(settings: Settings | None = None) -> socketio.ASGIApp:
    settings = settings or Settings()
    cors_origins = "*" if "*" in settings.CORS_ORIGINS else settings.CORS_ORIGINS
    server = socketio.AsyncServer(async_mode="asgi", cors_allowed_origins=cors_origins)
    toolkit, engine = build_toolkit(settings, server)
    toolkit.socket_manager().bind(server)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if engine is not None:
            await create_tables(engine)
        logger.info(f"Social toolkit started with '{settings.STORAGE_BACKEND}' storage")
        yield
        await toolkit.shutdown()
        if engine is not None:
            await engine.dispose()
        logger.info("Social toolkit stopped")

    app = create_app(toolkit, cors_origins=settings.CORS_ORIGINS, lifespan=lifespan)
    return socketio.ASGIApp(server, other_asgi_app=app)


def main() -> None:
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(create_asgi_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
