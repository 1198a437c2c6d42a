"""
Accounts and profiles.

'UserController' registers users, checks logins through the credential
provider and assembles profile views with their follower / following / post
counts.
"""

from loguru import logger

from social_toolkit.auth.base import CredentialProvider
from social_toolkit.controllers.base import require_text, require_user
from social_toolkit.errors import InvalidArgumentError, NotFoundError, UnauthorizedError
from social_toolkit.schemas import LoginResult, ProfileCounts, UserCard, UserListItem, UserProfile
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.user import User

SEARCH_LIMIT = 20


class UserController:
    def __init__(self, databases: SocialDatabases, credentials: CredentialProvider) -> None:
        self.user_db = databases.user_db
        self.post_db = databases.post_db
        self.follow_db = databases.follow_db
        self.credentials = credentials

    async def register(
        self, username: str | None, email: str | None, password: str | None, profile_pic: bytes | None = None
    ) -> User:
        username = require_text(username, "Username is required")
        email = require_text(email, "Email is required")
        if not password:
            raise InvalidArgumentError("Password is required")

        if await self.user_db.get_user_by_email(email):
            raise InvalidArgumentError("Email is already registered")
        if await self.user_db.get_user_by_username(username):
            raise InvalidArgumentError("Username is already taken")

        user = await self.user_db.create_user(
            User(
                username=username,
                email=email,
                password_hash=self.credentials.hash_password(password),
                profile_pic=profile_pic or None,
            )
        )
        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    async def login(self, email: str, password: str) -> LoginResult:
        user = await self.user_db.get_user_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        if not self.credentials.verify_password(password, user.password_hash):
            raise UnauthorizedError("Incorrect password")
        return LoginResult(
            token=self.credentials.issue_token(user.id),
            user_id=user.id,
            username=user.username,
            profile_pic=user.profile_pic,
        )

    async def get_own_profile(self, user_id: int) -> UserProfile:
        user = await require_user(self.user_db, user_id)
        return await self._profile(user, email=user.email)

    async def get_profile(self, user_id: int, viewer_id: int) -> UserProfile:
        user = await require_user(self.user_db, user_id)
        is_following = await self.follow_db.get_follow(viewer_id, user_id) is not None
        return await self._profile(user, is_following=is_following)

    async def update_profile(
        self,
        user_id: int,
        username: str | None = None,
        bio: str | None = None,
        password: str | None = None,
        profile_pic: bytes | None = None,
    ) -> UserProfile:
        user = await require_user(self.user_db, user_id)
        changes: dict = {}
        if username and username != user.username:
            existing = await self.user_db.get_user_by_username(username)
            if existing and existing.id != user_id:
                raise InvalidArgumentError("Username is already taken")
            changes["username"] = username
        if bio is not None:
            changes["bio"] = bio
        if profile_pic:
            changes["profile_pic"] = profile_pic
        if password:
            changes["password_hash"] = self.credentials.hash_password(password)

        updated = await self.user_db.update_user(user.model_copy(update=changes))
        return await self._profile(updated, email=updated.email)

    async def search_users(self, query: str | None) -> list[UserCard]:
        query = require_text(query, "A search term is required")
        return [UserCard.from_user(user) for user in await self.user_db.search_users(query, SEARCH_LIMIT)]

    async def list_users(self, viewer_id: int, search: str | None = None) -> list[UserListItem]:
        users = await self.user_db.list_users(exclude_user_id=viewer_id, search=search)
        followed_ids = set(await self.follow_db.get_followed_ids(viewer_id))
        return [
            UserListItem(
                id=user.id,
                username=user.username,
                profile_pic=user.profile_pic,
                bio=user.bio,
                created_at=user.created_at,
                is_following=user.id in followed_ids,
                followers=await self.follow_db.count_followers(user.id),
            )
            for user in users
        ]

    async def _profile(self, user: User, email: str | None = None, is_following: bool | None = None) -> UserProfile:
        return UserProfile(
            id=user.id,
            username=user.username,
            profile_pic=user.profile_pic,
            bio=user.bio,
            email=email,
            created_at=user.created_at,
            counts=ProfileCounts(
                posts=await self.post_db.count_posts(user_ids=[user.id]),
                followers=await self.follow_db.count_followers(user.id),
                following=await self.follow_db.count_following(user.id),
            ),
            is_following=is_following,
        )
