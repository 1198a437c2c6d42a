"""FastAPI dependencies: the toolkit, the authenticated user and pagination."""

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from social_toolkit.errors import UnauthorizedError
from social_toolkit.social_database.data_models.user import User
from social_toolkit.toolkit import SocialToolkit
from social_toolkit.utils.pagination import PageParams

bearer_scheme = HTTPBearer(auto_error=False)


def get_toolkit(request: Request) -> SocialToolkit:
    return request.app.state.toolkit


ToolkitDep = Annotated[SocialToolkit, Depends(get_toolkit)]


async def get_current_user(
    toolkit: ToolkitDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """
    Resolve the bearer token to a stored user.

    Every failure (no header, bad or expired token, deleted user) is reported
    the same way so clients cannot probe which part was wrong.
    """
    if credentials is None:
        raise UnauthorizedError("Please authenticate")
    try:
        user_id = toolkit.credentials.resolve_token(credentials.credentials)
    except UnauthorizedError as e:
        raise UnauthorizedError("Please authenticate") from e
    user = await toolkit.databases.user_db.get_user_by_id(user_id)
    if user is None:
        raise UnauthorizedError("Please authenticate")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def post_page(page: Annotated[int, Query(ge=1)] = 1, limit: Annotated[int, Query(ge=1)] = 10) -> PageParams:
    return PageParams(page=page, limit=limit)


def default_page(page: Annotated[int, Query(ge=1)] = 1, limit: Annotated[int, Query(ge=1)] = 20) -> PageParams:
    return PageParams(page=page, limit=limit)


PostPage = Annotated[PageParams, Depends(post_page)]
DefaultPage = Annotated[PageParams, Depends(default_page)]
