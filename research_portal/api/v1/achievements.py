"""
Achievement endpoints.
"""

from fastapi import APIRouter

from research_portal.api.deps import CurrentPrincipal, PageParams, QueryEngine, SearchParams
from research_portal.kernel.access import ResourceKind
from research_portal.schemas.achievement import AchievementResponse
from research_portal.schemas.common import PageEnvelope

router = APIRouter()


@router.get("", response_model=PageEnvelope[AchievementResponse])
async def list_achievements(
    principal: CurrentPrincipal,
    engine: QueryEngine,
    search: SearchParams,
    page: PageParams,
):
    """List achievements (admin and faculty see all, students none)."""
    result = await engine.list_visible(principal, ResourceKind.ACHIEVEMENTS, search, page)
    return PageEnvelope[AchievementResponse].from_result(result, AchievementResponse.model_validate)


@router.get("/showcase", response_model=PageEnvelope[AchievementResponse])
async def list_showcase_achievements(
    engine: QueryEngine,
    search: SearchParams,
    page: PageParams,
):
    """Public listing of achievements flagged for the home page."""
    result = await engine.list_public(ResourceKind.ACHIEVEMENTS, search, page)
    return PageEnvelope[AchievementResponse].from_result(result, AchievementResponse.model_validate)
