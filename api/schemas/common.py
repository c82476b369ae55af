"""Shared response shapes: error envelope and pagination."""
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from application.ports import Page

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Names and titles share this character set
NAME_PATTERN = r"^[a-zA-Z0-9\s\-()]+$"


class ErrorResponse(BaseModel):
    """Envelope returned for every error status."""

    message: str
    status: int
    errors: Optional[Dict[str, str]] = None
    details: Optional[Dict[str, Any]] = None


class PagedResponse(BaseModel, Generic[T]):
    """One page of a collection."""

    items: List[T]
    total: int = Field(description="Number of matching active rows")
    page: int = Field(description="Zero-based page index")
    size: int
    total_pages: int
    has_next: bool

    @classmethod
    def from_page(cls, page: Page, items: List[T]) -> "PagedResponse[T]":
        return cls(
            items=items,
            total=page.total,
            page=page.page,
            size=page.size,
            total_pages=page.total_pages,
            has_next=page.has_next,
        )


class ExistenceCheckResponse(BaseModel):
    exists: bool
