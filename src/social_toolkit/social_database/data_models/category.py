"""
Category data model and storage interface.

Categories are a flat, admin-curated list every post is filed under.
Names are unique.
"""

from abc import ABC, abstractmethod

from social_toolkit.social_database.data_models.base import SocialModel


class Category(SocialModel):
    id: int = 0
    name: str
    description: str | None = None


class CategoryDatabase(ABC):
    """Abstract repository for 'Category' records."""

    @abstractmethod
    async def create_category(self, category: Category) -> Category:
        pass

    @abstractmethod
    async def get_category_by_id(self, category_id: int) -> Category | None:
        pass

    @abstractmethod
    async def get_category_by_name(self, name: str) -> Category | None:
        pass

    @abstractmethod
    async def get_categories(self) -> list[Category]:
        """All categories ordered by name."""
        pass
