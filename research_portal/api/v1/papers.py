"""
Research paper endpoints.
"""

from fastapi import APIRouter

from research_portal.api.deps import CurrentPrincipal, PageParams, QueryEngine, SearchParams
from research_portal.kernel.access import ResourceKind
from research_portal.schemas.common import PageEnvelope
from research_portal.schemas.paper import PaperResponse

router = APIRouter()


@router.get("", response_model=PageEnvelope[PaperResponse])
async def list_papers(
    principal: CurrentPrincipal,
    engine: QueryEngine,
    search: SearchParams,
    page: PageParams,
):
    """List papers the caller authored, advises, or (admin) all papers."""
    result = await engine.list_visible(principal, ResourceKind.PAPERS, search, page)
    return PageEnvelope[PaperResponse].from_result(result, PaperResponse.model_validate)


@router.get("/published", response_model=PageEnvelope[PaperResponse])
async def list_published_papers(
    engine: QueryEngine,
    search: SearchParams,
    page: PageParams,
):
    """Public listing of published papers. No authentication required."""
    result = await engine.list_public(ResourceKind.PAPERS, search, page)
    return PageEnvelope[PaperResponse].from_result(result, PaperResponse.model_validate)


@router.get("/{paper_id}", response_model=PaperResponse)
async def get_paper(
    paper_id: str,
    principal: CurrentPrincipal,
    engine: QueryEngine,
):
    """Get a paper by ID; hidden papers are reported as not found."""
    paper = await engine.get_visible(principal, ResourceKind.PAPERS, paper_id)
    return PaperResponse.model_validate(paper)
