"""
Page requests and page results.
"""

import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar, Union

from research_portal.kernel.access.errors import ValidationError

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Largest OFFSET the database drivers accept (signed 64-bit)
MAX_OFFSET = 2**63 - 1


def _parse_positive(name: str, raw: Union[str, int, None], default: int, maximum: int) -> int:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer") from None
    if value < 1:
        raise ValidationError(f"{name} must be at least 1")
    if value > maximum:
        raise ValidationError(f"{name} must be at most {maximum}")
    return value


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        if self.page < 1:
            raise ValidationError("page must be at least 1")
        if self.limit < 1:
            raise ValidationError("limit must be at least 1")
        if self.limit > MAX_OFFSET:
            raise ValidationError("limit is out of range")
        if self.skip > MAX_OFFSET:
            raise ValidationError("page is out of range")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(
        cls,
        page: Union[str, int, None] = None,
        limit: Union[str, int, None] = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> "PageRequest":
        """Coerce wire strings; missing values fall back to the defaults."""
        limit_value = _parse_positive("limit", limit, default_limit, max_limit)
        return cls(
            page=_parse_positive("page", page, DEFAULT_PAGE, MAX_OFFSET // limit_value + 1),
            limit=limit_value,
        )


@dataclass(frozen=True)
class Pagination:
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of records plus the scoped total they were cut from."""

    data: List[T]
    pagination: Pagination

    @classmethod
    def create(cls, data: List[T], total: int, page_request: PageRequest) -> "PageResult[T]":
        return cls(
            data=list(data),
            pagination=Pagination(total=total, page=page_request.page, limit=page_request.limit),
        )
