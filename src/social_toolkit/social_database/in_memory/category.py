from itertools import count

from social_toolkit.social_database.data_models.category import Category, CategoryDatabase


class InMemoryCategoryDatabase(CategoryDatabase):
    def __init__(self) -> None:
        self.categories: dict[int, Category] = {}
        self._ids = count(1)

    async def create_category(self, category: Category) -> Category:
        stored = category.model_copy(update={"id": next(self._ids)})
        self.categories[stored.id] = stored
        return stored.model_copy()

    async def get_category_by_id(self, category_id: int) -> Category | None:
        category = self.categories.get(category_id)
        return category.model_copy() if category else None

    async def get_category_by_name(self, name: str) -> Category | None:
        return next((c.model_copy() for c in self.categories.values() if c.name == name), None)

    async def get_categories(self) -> list[Category]:
        return [c.model_copy() for c in sorted(self.categories.values(), key=lambda c: c.name)]
