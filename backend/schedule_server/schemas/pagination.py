from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of items with the size of the full result set."""

    items: list[T] = Field(description="Items on the current page")
    total_count: int = Field(description="Number of items across all pages")
    page_number: int = Field(description="Current page, starting at 1")
    page_size: int = Field(description="Requested page size")
    total_pages: int = Field(description="Number of pages")

    @classmethod
    def from_page(
        cls, page: Any, convert: Optional[Callable[[Any], T]] = None
    ) -> PaginatedResponse[T]:
        """Build from a repository ``Page``, optionally mapping each item."""
        items = [convert(item) for item in page.items] if convert else list(page.items)
        return cls(
            items=items,
            total_count=page.total_count,
            page_number=page.page_number,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
