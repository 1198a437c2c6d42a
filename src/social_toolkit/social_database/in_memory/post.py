from itertools import count

from social_toolkit.social_database.data_models.post import Post, PostDatabase
from social_toolkit.social_database.in_memory.base import contains, slice_page


class InMemoryPostDatabase(PostDatabase):
    def __init__(self) -> None:
        self.posts: dict[int, Post] = {}
        self._ids = count(1)

    async def create_post(self, post: Post) -> Post:
        stored = post.model_copy(update={"id": next(self._ids)})
        self.posts[stored.id] = stored
        return stored.model_copy()

    async def get_post_by_id(self, post_id: int) -> Post | None:
        post = self.posts.get(post_id)
        return post.model_copy() if post else None

    async def update_post(self, post: Post) -> Post:
        if post.id not in self.posts:
            raise KeyError(f"Post {post.id} does not exist")
        self.posts[post.id] = post.model_copy()
        return post

    async def delete_post(self, post_id: int) -> bool:
        return self.posts.pop(post_id, None) is not None

    def _filter(self, user_ids: list[int] | None, category_id: int | None, search: str | None) -> list[Post]:
        posts = list(self.posts.values())
        if user_ids is not None:
            posts = [p for p in posts if p.user_id in user_ids]
        if category_id is not None:
            posts = [p for p in posts if p.category_id == category_id]
        if search:
            posts = [p for p in posts if contains(p.description, search)]
        return sorted(posts, key=lambda p: (p.created_at, p.id), reverse=True)

    async def get_posts(
        self,
        user_ids: list[int] | None = None,
        category_id: int | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Post]:
        posts = self._filter(user_ids, category_id, search)
        return [p.model_copy() for p in slice_page(posts, offset, limit)]

    async def count_posts(
        self,
        user_ids: list[int] | None = None,
        category_id: int | None = None,
        search: str | None = None,
    ) -> int:
        return len(self._filter(user_ids, category_id, search))
