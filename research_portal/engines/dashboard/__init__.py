"""
Dashboard Engine - role-scoped statistics.
"""

from research_portal.engines.dashboard.stats_service import (
    ChartData,
    ChartSlice,
    DashboardStatsService,
    ROLE_CATEGORIES,
)

__all__ = [
    "ChartData",
    "ChartSlice",
    "DashboardStatsService",
    "ROLE_CATEGORIES",
]
