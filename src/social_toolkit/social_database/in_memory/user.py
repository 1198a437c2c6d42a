from itertools import count

from social_toolkit.social_database.data_models.user import User, UserDatabase
from social_toolkit.social_database.in_memory.base import contains


class InMemoryUserDatabase(UserDatabase):
    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self._ids = count(1)

    async def create_user(self, user: User) -> User:
        stored = user.model_copy(update={"id": next(self._ids)})
        self.users[stored.id] = stored
        return stored.model_copy()

    async def get_user_by_id(self, user_id: int) -> User | None:
        user = self.users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_email(self, email: str) -> User | None:
        return next((user.model_copy() for user in self.users.values() if user.email == email), None)

    async def get_user_by_username(self, username: str) -> User | None:
        return next((user.model_copy() for user in self.users.values() if user.username == username), None)

    async def get_users_by_ids(self, user_ids: list[int]) -> list[User]:
        return [self.users[user_id].model_copy() for user_id in dict.fromkeys(user_ids) if user_id in self.users]

    async def update_user(self, user: User) -> User:
        if user.id not in self.users:
            raise KeyError(f"User {user.id} does not exist")
        self.users[user.id] = user.model_copy()
        return user

    async def search_users(self, query: str, limit: int) -> list[User]:
        matches = [user for user in self.users.values() if contains(user.username, query) or contains(user.email, query)]
        return [user.model_copy() for user in matches[:limit]]

    async def list_users(self, exclude_user_id: int, search: str | None = None) -> list[User]:
        users = [user for user in self.users.values() if user.id != exclude_user_id]
        if search and search.strip():
            term = search.strip()
            users = [user for user in users if contains(user.username, term) or contains(user.bio, term)]
        return [user.model_copy() for user in users]
