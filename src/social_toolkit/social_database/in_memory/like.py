from social_toolkit.social_database.data_models.like import Like, LikeDatabase
from social_toolkit.social_database.in_memory.base import slice_page


class InMemoryLikeDatabase(LikeDatabase):
    def __init__(self) -> None:
        self.likes: dict[tuple[int, int], Like] = {}

    async def create_like(self, like: Like) -> Like:
        key = (like.user_id, like.post_id)
        if key in self.likes:
            raise ValueError(f"User {like.user_id} already likes post {like.post_id}")
        self.likes[key] = like.model_copy()
        return like

    async def get_like(self, user_id: int, post_id: int) -> Like | None:
        like = self.likes.get((user_id, post_id))
        return like.model_copy() if like else None

    async def delete_like(self, user_id: int, post_id: int) -> bool:
        return self.likes.pop((user_id, post_id), None) is not None

    async def get_likes_by_post(self, post_id: int, offset: int = 0, limit: int | None = None) -> list[Like]:
        likes = sorted((like for like in self.likes.values() if like.post_id == post_id), key=lambda like: like.created_at)
        return [like.model_copy() for like in slice_page(likes, offset, limit)]

    async def count_likes(self, post_id: int) -> int:
        return sum(1 for like in self.likes.values() if like.post_id == post_id)

    async def delete_likes_by_post(self, post_id: int) -> int:
        keys = [key for key, like in self.likes.items() if like.post_id == post_id]
        for key in keys:
            del self.likes[key]
        return len(keys)
