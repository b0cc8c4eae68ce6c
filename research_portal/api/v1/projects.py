"""
Project endpoints.
"""

from fastapi import APIRouter

from research_portal.api.deps import CurrentPrincipal, PageParams, QueryEngine, SearchParams
from research_portal.kernel.access import ResourceKind
from research_portal.logging_config import get_logger
from research_portal.schemas.common import PageEnvelope
from research_portal.schemas.project import ProjectResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=PageEnvelope[ProjectResponse])
async def list_projects(
    principal: CurrentPrincipal,
    engine: QueryEngine,
    search: SearchParams,
    page: PageParams,
):
    """
    List projects visible to the caller.

    Students see projects they are members of, faculty see projects they
    advise, admins see all. Filter with status and reviewerStatus.
    """
    result = await engine.list_visible(principal, ResourceKind.PROJECTS, search, page)
    logger.info(
        "Projects listed",
        extra={"role": principal.role.value, "total": result.pagination.total},
    )
    return PageEnvelope[ProjectResponse].from_result(result, ProjectResponse.model_validate)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    principal: CurrentPrincipal,
    engine: QueryEngine,
):
    """Get a project by ID; hidden projects are reported as not found."""
    project = await engine.get_visible(principal, ResourceKind.PROJECTS, project_id)
    return ProjectResponse.model_validate(project)
