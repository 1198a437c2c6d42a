from sqlalchemy import select

from social_toolkit.social_database.data_models.category import Category, CategoryDatabase
from social_toolkit.social_database.sql.base import SQLRepository
from social_toolkit.social_database.sql.tables import CategoryRow


class SQLCategoryDatabase(SQLRepository, CategoryDatabase):
    async def create_category(self, category: Category) -> Category:
        async with self.session_factory() as session:
            row = CategoryRow(name=category.name, description=category.description)
            session.add(row)
            await session.commit()
            return row.to_model()

    async def get_category_by_id(self, category_id: int) -> Category | None:
        async with self.session_factory() as session:
            row = await session.get(CategoryRow, category_id)
            return row.to_model() if row else None

    async def get_category_by_name(self, name: str) -> Category | None:
        async with self.session_factory() as session:
            row = await session.scalar(select(CategoryRow).where(CategoryRow.name == name))
            return row.to_model() if row else None

    async def get_categories(self) -> list[Category]:
        async with self.session_factory() as session:
            rows = await session.scalars(select(CategoryRow).order_by(CategoryRow.name))
            return [row.to_model() for row in rows]
