"""
Common schema types used across the API.
"""

from typing import Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from research_portal.kernel.access import PageResult

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    request_id: Optional[str] = None


class PaginationMeta(BaseModel):
    """Pagination block of a list response."""

    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")

    class Config:
        populate_by_name = True


class PageEnvelope(BaseModel, Generic[T]):
    """Paginated list response: {data, pagination}."""

    data: List[T]
    pagination: PaginationMeta

    @classmethod
    def from_result(
        cls,
        result: PageResult,
        convert: Callable[[object], T],
    ) -> "PageEnvelope[T]":
        return cls(
            data=[convert(record) for record in result.data],
            pagination=PaginationMeta(**result.pagination.as_dict()),
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    database: str = "connected"
