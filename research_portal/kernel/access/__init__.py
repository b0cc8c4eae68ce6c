"""
Access Core - role-scoped visibility, filtering and pagination.
"""

from research_portal.kernel.access.errors import (
    AccessError,
    ValidationError,
    AuthorizationError,
    NotFoundError,
    StorageError,
)
from research_portal.kernel.access.principal import Principal, parse_identifier, parse_role
from research_portal.kernel.access.resources import ResourceKind, ResourceSpec, get_spec
from research_portal.kernel.access.visibility import (
    VisibilityPredicate,
    VisibilityScope,
    resolve_visibility,
)
from research_portal.kernel.access.filters import FilterPredicate, SearchFilter, build_filter
from research_portal.kernel.access.pagination import PageRequest, PageResult, Pagination
from research_portal.kernel.access.engine import AccessScopedQueryEngine

__all__ = [
    # Errors
    "AccessError",
    "ValidationError",
    "AuthorizationError",
    "NotFoundError",
    "StorageError",
    # Principal
    "Principal",
    "parse_identifier",
    "parse_role",
    # Resources
    "ResourceKind",
    "ResourceSpec",
    "get_spec",
    # Visibility
    "VisibilityPredicate",
    "VisibilityScope",
    "resolve_visibility",
    # Filters
    "FilterPredicate",
    "SearchFilter",
    "build_filter",
    # Pagination
    "PageRequest",
    "PageResult",
    "Pagination",
    # Engine
    "AccessScopedQueryEngine",
]
