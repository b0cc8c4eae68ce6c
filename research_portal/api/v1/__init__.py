"""
API v1 routes.
"""

from fastapi import APIRouter

from research_portal.api.v1 import projects, papers, achievements, users, dashboard
from research_portal.schemas.common import ErrorResponse

# Every failure uses the {error, request_id} envelope built in main.py
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid parameters"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Unrecognized role"},
    404: {"model": ErrorResponse, "description": "Not found or not visible"},
    500: {"model": ErrorResponse, "description": "Storage failure"},
}

router = APIRouter(responses=ERROR_RESPONSES)

router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(papers.router, prefix="/papers", tags=["Papers"])
router.include_router(achievements.router, prefix="/achievements", tags=["Achievements"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
