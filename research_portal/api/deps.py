"""
FastAPI dependencies for database sessions, authentication and list parameters.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from research_portal.config import get_settings
from research_portal.database import get_db
from research_portal.kernel.access import (
    AccessScopedQueryEngine,
    PageRequest,
    Principal,
    SearchFilter,
    ValidationError,
)
from research_portal.kernel.identity.jwt import verify_access_token
from research_portal.logging_config import principal_id_var


# Security scheme
security = HTTPBearer(auto_error=False)


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_principal(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> Principal:
    """
    Resolve the caller from the bearer token.

    Missing or invalid tokens are 401. A valid token naming an unknown role
    raises AuthorizationError (403) from Principal.from_claims.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        principal = Principal.from_claims(payload.sub, payload.role)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token subject",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    principal_id_var.set(str(principal.id))
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def get_query_engine(db: DbSession) -> AccessScopedQueryEngine:
    """One engine per request, bound to the request's session."""
    return AccessScopedQueryEngine(db)


QueryEngine = Annotated[AccessScopedQueryEngine, Depends(get_query_engine)]


def get_page_request(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size"),
) -> PageRequest:
    """Coerce page/limit from the query string (400 on bad values)."""
    settings = get_settings()
    return PageRequest.from_params(
        page,
        limit,
        default_limit=settings.default_page_limit,
        max_limit=settings.max_page_limit,
    )


PageParams = Annotated[PageRequest, Depends(get_page_request)]


def get_search_filter(
    query: Optional[str] = Query(None, description="Case-insensitive search term"),
    status_filter: Optional[str] = Query(None, alias="status"),
    reviewer_status: Optional[str] = Query(None, alias="reviewerStatus"),
    user_type: Optional[str] = Query(None, alias="userType"),
    department: Optional[str] = Query(None),
    is_verified: Optional[str] = Query(None, alias="isVerified"),
) -> SearchFilter:
    """Collect raw filter strings; validation happens per resource kind."""
    return SearchFilter(
        query=query,
        status=status_filter,
        reviewer_status=reviewer_status,
        user_type=user_type,
        department=department,
        is_verified=is_verified,
    )


SearchParams = Annotated[SearchFilter, Depends(get_search_filter)]
