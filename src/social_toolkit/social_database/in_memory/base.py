"""Helpers shared by the in-memory repositories."""

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def slice_page(items: Sequence[T], offset: int = 0, limit: int | None = None) -> list[T]:
    end = None if limit is None else offset + limit
    return list(items[offset:end])


def contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle.lower() in haystack.lower()  # type: ignore[union-attr]
