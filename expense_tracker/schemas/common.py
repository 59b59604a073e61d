# expense_tracker/schemas/common.py
from decimal import Decimal
from typing import Generic, List, TypeVar
from pydantic import BaseModel

T = TypeVar("T")

class CountResponse(BaseModel):
    count: int

class ExistsResponse(BaseModel):
    exists: bool

class TotalResponse(BaseModel):
    total: Decimal

class Page(BaseModel, Generic[T]):
    """Window over an ordered result set; page numbers start at 0."""
    content: List[T]
    total_elements: int
    total_pages: int
    page: int
    size: int
    number_of_elements: int
    first: bool
    last: bool

    @classmethod
    def build(cls, content: List[T], total_elements: int, page: int, size: int) -> "Page[T]":
        total_pages = (total_elements + size - 1) // size if size else 0
        return cls(
            content=content,
            total_elements=total_elements,
            total_pages=total_pages,
            page=page,
            size=size,
            number_of_elements=len(content),
            first=page == 0,
            last=page >= total_pages - 1,
        )
