from fastapi import APIRouter, status

from social_toolkit.api.dependencies import CurrentUser, ToolkitDep
from social_toolkit.api.schemas import CategoryCreate
from social_toolkit.social_database.data_models.category import Category

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(toolkit: ToolkitDep, user: CurrentUser, body: CategoryCreate) -> Category:
    return await toolkit.categories.create_category(body.name, body.description)


@router.get("")
async def list_categories(toolkit: ToolkitDep) -> list[Category]:
    return await toolkit.categories.list_categories()


@router.get("/{category_id}")
async def get_category(toolkit: ToolkitDep, category_id: int) -> Category:
    return await toolkit.categories.get_category(category_id)
