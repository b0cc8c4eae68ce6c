"""
Role-based visibility.

A principal's role decides which records of a kind it may see:

    role     | kind has the relation   | kind lacks the relation
    ---------+-------------------------+------------------------
    ADMIN    | everything              | everything
    FACULTY  | supervised records      | everything
    STUDENT  | owned records           | nothing

FACULTY sees every achievement and every user since neither kind has a
supervisory relation. Pending product confirmation, see DESIGN.md.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sqlalchemy import false, true
from sqlalchemy.sql.elements import ColumnElement

from research_portal.kernel.access.errors import AuthorizationError
from research_portal.kernel.access.principal import Principal
from research_portal.kernel.access.resources import SELF, ResourceKind, get_spec
from research_portal.kernel.models.user import User, UserRole


class VisibilityScope(str, Enum):
    ALL = "all"
    NONE = "none"
    OWNER = "owner"
    SUPERVISOR = "supervisor"


@dataclass(frozen=True)
class VisibilityPredicate:
    """Which records of one kind a principal may see."""

    kind: ResourceKind
    scope: VisibilityScope
    principal_id: Optional[uuid.UUID] = None
    relation: Optional[str] = None

    def clause(self) -> ColumnElement:
        """Render as a SQL boolean expression over the kind's table."""
        if self.scope == VisibilityScope.ALL:
            return true()
        if self.scope == VisibilityScope.NONE:
            return false()

        model = get_spec(self.kind).model
        if self.relation == SELF:
            return model.id == self.principal_id
        return getattr(model, self.relation).any(User.id == self.principal_id)

    def accepts(self, record: Any) -> bool:
        """Evaluate against a loaded record (relations must be loaded)."""
        if self.scope == VisibilityScope.ALL:
            return True
        if self.scope == VisibilityScope.NONE:
            return False
        if self.relation == SELF:
            return record.id == self.principal_id
        return any(user.id == self.principal_id for user in getattr(record, self.relation))


def resolve_visibility(principal: Principal, kind: ResourceKind) -> VisibilityPredicate:
    """
    Build the visibility predicate for a principal and resource kind.

    Raises:
        AuthorizationError: the principal's role is not a known role
    """
    spec = get_spec(kind)
    role = principal.role

    if role == UserRole.ADMIN:
        return VisibilityPredicate(kind=spec.kind, scope=VisibilityScope.ALL)

    if role == UserRole.FACULTY:
        if spec.supervisory_relation is None:
            return VisibilityPredicate(kind=spec.kind, scope=VisibilityScope.ALL)
        return VisibilityPredicate(
            kind=spec.kind,
            scope=VisibilityScope.SUPERVISOR,
            principal_id=principal.id,
            relation=spec.supervisory_relation,
        )

    if role == UserRole.STUDENT:
        if spec.owner_relation is None:
            return VisibilityPredicate(kind=spec.kind, scope=VisibilityScope.NONE)
        return VisibilityPredicate(
            kind=spec.kind,
            scope=VisibilityScope.OWNER,
            principal_id=principal.id,
            relation=spec.owner_relation,
        )

    raise AuthorizationError(f"Unrecognized role: {role}")
