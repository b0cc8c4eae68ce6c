"""
Dashboard endpoints.
"""

from fastapi import APIRouter

from research_portal.api.deps import CurrentPrincipal, DbSession
from research_portal.engines.dashboard import ChartData, DashboardStatsService

router = APIRouter()


@router.get("/chart-data", response_model=ChartData)
async def get_chart_data(
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Record counts per category, scoped to what the caller can see."""
    service = DashboardStatsService(db)
    return await service.chart_data(principal)
