from social_toolkit.controllers.base import require_text
from social_toolkit.errors import InvalidArgumentError, NotFoundError
from social_toolkit.social_database import SocialDatabases
from social_toolkit.social_database.data_models.category import Category


class CategoryController:
    def __init__(self, databases: SocialDatabases) -> None:
        self.category_db = databases.category_db

    async def create_category(self, name: str | None, description: str | None = None) -> Category:
        name = require_text(name, "Category name is required")
        if await self.category_db.get_category_by_name(name):
            raise InvalidArgumentError("Category already exists")
        return await self.category_db.create_category(Category(name=name, description=description))

    async def get_category(self, category_id: int) -> Category:
        category = await self.category_db.get_category_by_id(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def list_categories(self) -> list[Category]:
        return await self.category_db.get_categories()
