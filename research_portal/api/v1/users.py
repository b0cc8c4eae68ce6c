"""
User directory endpoints.
"""

from fastapi import APIRouter

from research_portal.api.deps import CurrentPrincipal, PageParams, QueryEngine, SearchParams
from research_portal.kernel.access import ResourceKind
from research_portal.schemas.common import PageEnvelope
from research_portal.schemas.user import UserResponse

router = APIRouter()


@router.get("", response_model=PageEnvelope[UserResponse])
async def list_users(
    principal: CurrentPrincipal,
    engine: QueryEngine,
    search: SearchParams,
    page: PageParams,
):
    """
    Search users by name or email.

    Filters: userType, department (exact), isVerified (true/false).
    Students only ever see their own record.
    """
    result = await engine.list_visible(principal, ResourceKind.USERS, search, page)
    return PageEnvelope[UserResponse].from_result(result, UserResponse.model_validate)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    principal: CurrentPrincipal,
    engine: QueryEngine,
):
    """Get a user by ID; students can only fetch their own record."""
    user = await engine.get_visible(principal, ResourceKind.USERS, user_id)
    return UserResponse.model_validate(user)
