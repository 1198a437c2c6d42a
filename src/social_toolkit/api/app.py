from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from social_toolkit.api.exception_handlers import register_exception_handlers
from social_toolkit.api.routes import routers
from social_toolkit.toolkit import SocialToolkit


def create_app(toolkit: SocialToolkit, cors_origins: list[str] | None = None, lifespan=None) -> FastAPI:  # noqa: ANN001
    """Build the HTTP application around an already wired toolkit."""
    app = FastAPI(title="Social Toolkit", lifespan=lifespan)
    app.state.toolkit = toolkit

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    for router in routers:
        app.include_router(router)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
