"""
Dashboard Stats Service - per-role record counts for the dashboard chart.

Counts go through the access engine, so a faculty member's "papers" figure
is the number of papers they supervise, never the global number.
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from research_portal.kernel.access import AccessScopedQueryEngine, Principal, ResourceKind
from research_portal.kernel.models.user import UserRole
from research_portal.logging_config import get_logger

logger = get_logger(__name__)


class ChartSlice(BaseModel):
    """One category of the dashboard chart."""

    category: str
    count: int


class ChartData(BaseModel):
    """Dashboard chart for one principal."""

    data: List[ChartSlice]
    user_type: UserRole = Field(alias="userType")
    total: int

    class Config:
        populate_by_name = True


# Categories shown per role, in display order
ROLE_CATEGORIES: Dict[UserRole, Tuple[ResourceKind, ...]] = {
    UserRole.ADMIN: (
        ResourceKind.PROJECTS,
        ResourceKind.PAPERS,
        ResourceKind.ACHIEVEMENTS,
        ResourceKind.USERS,
    ),
    UserRole.FACULTY: (ResourceKind.PROJECTS, ResourceKind.PAPERS),
    UserRole.STUDENT: (ResourceKind.PROJECTS, ResourceKind.PAPERS),
}


class DashboardStatsService:
    """Builds chart data from visibility-scoped counts."""

    def __init__(self, session: AsyncSession):
        self.engine = AccessScopedQueryEngine(session)

    async def chart_data(self, principal: Principal) -> ChartData:
        slices = []
        for kind in ROLE_CATEGORIES[principal.role]:
            count = await self.engine.count_visible(principal, kind)
            slices.append(ChartSlice(category=kind.value, count=count))

        logger.debug(
            "Dashboard counts computed",
            extra={"categories": [s.category for s in slices]},
        )
        return ChartData(
            data=slices,
            user_type=principal.role,
            total=sum(s.count for s in slices),
        )
