"""
Access-scoped query engine.

Turns (principal, kind, search filter, page request) into a PageResult. The
visibility predicate is applied to the count as well as to the page, so
totals and statistics never include records outside the caller's scope.
"""

import uuid
from typing import Any, Optional, Union

from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from research_portal.kernel.access.errors import AuthorizationError, NotFoundError, StorageError
from research_portal.kernel.access.filters import SearchFilter, build_filter
from research_portal.kernel.access.pagination import PageRequest, PageResult
from research_portal.kernel.access.principal import Principal, parse_identifier
from research_portal.kernel.access.resources import ResourceKind, get_spec
from research_portal.kernel.access.visibility import resolve_visibility
from research_portal.logging_config import get_logger

logger = get_logger(__name__)

_NOT_FOUND_LABELS = {
    ResourceKind.PROJECTS: "Project not found",
    ResourceKind.PAPERS: "Paper not found",
    ResourceKind.ACHIEVEMENTS: "Achievement not found",
    ResourceKind.USERS: "User not found",
}


class AccessScopedQueryEngine:
    """
    Read-only, role-scoped listing over one database session.

    The engine holds no state besides the session; create one per request.
    Storage failures surface as StorageError without retries.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_page(
        self,
        kind: ResourceKind,
        predicate: ColumnElement,
        page_request: PageRequest,
    ) -> PageResult:
        """
        Count every record matching the predicate, then fetch one page of them.

        Rows come back newest first with id as tie-break. Count and fetch
        run back to back on the same session; a concurrent insert between
        them can make total and data disagree for that one response.
        """
        spec = get_spec(kind)

        count_query = select(func.count()).select_from(spec.model).where(predicate)
        rows_query = (
            select(spec.model)
            .where(predicate)
            .options(*spec.load_options())
            .order_by(*spec.order_by())
            .offset(page_request.skip)
            .limit(page_request.limit)
        )

        try:
            total = (await self.session.execute(count_query)).scalar_one()
            if page_request.skip >= total:
                rows = []
            else:
                rows = list((await self.session.execute(rows_query)).scalars().all())
        except SQLAlchemyError as exc:
            logger.error(
                "Scoped fetch failed",
                extra={"kind": spec.kind.value, "error_type": type(exc).__name__},
            )
            raise StorageError() from exc

        logger.debug(
            "Scoped page fetched",
            extra={
                "kind": spec.kind.value,
                "total": total,
                "page": page_request.page,
                "limit": page_request.limit,
                "returned": len(rows),
            },
        )
        return PageResult.create(rows, total, page_request)

    async def list_visible(
        self,
        principal: Principal,
        kind: ResourceKind,
        search_filter: Optional[SearchFilter] = None,
        page_request: Optional[PageRequest] = None,
    ) -> PageResult:
        """List the records of a kind that the principal may see."""
        visibility = resolve_visibility(principal, kind)
        filter_predicate = build_filter(kind, search_filter)
        predicate = and_(visibility.clause(), filter_predicate.clause())
        return await self.fetch_page(kind, predicate, page_request or PageRequest())

    async def list_public(
        self,
        kind: ResourceKind,
        search_filter: Optional[SearchFilter] = None,
        page_request: Optional[PageRequest] = None,
    ) -> PageResult:
        """Anonymous showcase listing: published papers, home page achievements."""
        spec = get_spec(kind)
        if spec.public_scope is None:
            raise AuthorizationError(f"{spec.kind.value} are not publicly listed")
        filter_predicate = build_filter(kind, search_filter)
        predicate = and_(spec.public_scope(), filter_predicate.clause())
        return await self.fetch_page(kind, predicate, page_request or PageRequest())

    async def get_visible(
        self,
        principal: Principal,
        kind: ResourceKind,
        resource_id: Union[str, uuid.UUID],
    ) -> Any:
        """
        Fetch one record by id within the principal's scope.

        Raises:
            ValidationError: the id is malformed
            NotFoundError: the record is missing or not visible
        """
        spec = get_spec(kind)
        record_id = parse_identifier(resource_id)
        visibility = resolve_visibility(principal, kind)

        query = (
            select(spec.model)
            .where(and_(spec.model.id == record_id, visibility.clause()))
            .options(*spec.load_options())
        )
        try:
            record = (await self.session.execute(query)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error(
                "Scoped lookup failed",
                extra={"kind": spec.kind.value, "error_type": type(exc).__name__},
            )
            raise StorageError() from exc

        if record is None:
            raise NotFoundError(_NOT_FOUND_LABELS[spec.kind])
        return record

    async def count_visible(self, principal: Principal, kind: ResourceKind) -> int:
        """Number of records of a kind the principal may see."""
        spec = get_spec(kind)
        visibility = resolve_visibility(principal, kind)
        query = select(func.count()).select_from(spec.model).where(visibility.clause())
        try:
            return (await self.session.execute(query)).scalar_one()
        except SQLAlchemyError as exc:
            logger.error(
                "Scoped count failed",
                extra={"kind": spec.kind.value, "error_type": type(exc).__name__},
            )
            raise StorageError() from exc
