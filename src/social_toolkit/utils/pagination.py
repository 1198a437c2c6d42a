"""
Offset pagination shared by every list endpoint.

List responses are '{data: [...], pagination: {total, page, limit, pages}}'
where 'pages' is 'ceil(total / limit)'.
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from social_toolkit.social_database.data_models.base import SocialModel

T = TypeVar("T")


class PageParams(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(SocialModel):
    total: int
    page: int
    limit: int
    pages: int


class Page(SocialModel, Generic[T]):
    data: list[T]
    pagination: Pagination

    @classmethod
    def build(cls, data: list[T], total: int, params: PageParams) -> "Page[T]":
        return cls(
            data=data,
            pagination=Pagination(
                total=total,
                page=params.page,
                limit=params.limit,
                pages=math.ceil(total / params.limit),
            ),
        )
