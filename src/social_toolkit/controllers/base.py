"""Helpers shared by the controllers."""

from social_toolkit.errors import InvalidArgumentError, NotFoundError
from social_toolkit.schemas import UserSummary
from social_toolkit.social_database.data_models.user import User, UserDatabase


def require_text(value: str | None, message: str) -> str:
    """Return 'value' stripped, or raise 'InvalidArgumentError' when it is missing or blank."""
    if value is None or not value.strip():
        raise InvalidArgumentError(message)
    return value.strip()


async def require_user(user_db: UserDatabase, user_id: int) -> User:
    user = await user_db.get_user_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def summaries_by_id(user_db: UserDatabase, user_ids: list[int]) -> dict[int, UserSummary]:
    return {user.id: UserSummary.from_user(user) for user in await user_db.get_users_by_ids(user_ids)}
