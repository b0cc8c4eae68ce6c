"""
Pydantic schemas for API responses.
"""

from research_portal.schemas.user import UserSummary, UserResponse
from research_portal.schemas.project import ProjectResponse
from research_portal.schemas.paper import PaperResponse
from research_portal.schemas.achievement import AchievementResponse
from research_portal.schemas.common import (
    PageEnvelope,
    PaginationMeta,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    # User
    "UserSummary",
    "UserResponse",
    # Project
    "ProjectResponse",
    # Paper
    "PaperResponse",
    # Achievement
    "AchievementResponse",
    # Common
    "PageEnvelope",
    "PaginationMeta",
    "ErrorResponse",
    "HealthResponse",
]
