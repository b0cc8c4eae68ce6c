"""
Resource registry.

One ResourceSpec per listable kind describes everything the access layer
needs to know about it: which relation makes a user an owner or a
supervisor, which text fields a search term is matched against, which
structured filters are accepted, and how rows are ordered.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Type

from sqlalchemy import String, cast, column, exists, false, func, select
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import FunctionElement

from research_portal.kernel.access.errors import ValidationError
from research_portal.kernel.models import (
    Achievement,
    Paper,
    PaperStatus,
    Project,
    ProjectStatus,
    ReviewerStatus,
    User,
    UserRole,
)


class ResourceKind(str, Enum):
    """Kinds of records the portal lists."""
    PROJECTS = "projects"
    PAPERS = "papers"
    ACHIEVEMENTS = "achievements"
    USERS = "users"


# Owner relation marker: the record is owned by the user it describes
SELF = "self"

TextMatcher = Callable[[str], ColumnElement]


@dataclass(frozen=True)
class StructuredField:
    """A filter matched by exact value against one column."""

    column: str
    enum: Optional[Type[Enum]] = None
    boolean: bool = False


@dataclass(frozen=True)
class ResourceSpec:
    kind: ResourceKind
    model: Type[Any]
    owner_relation: Optional[str]
    supervisory_relation: Optional[str]
    text_matchers: Tuple[TextMatcher, ...]
    structured: Dict[str, StructuredField] = field(default_factory=dict)
    order_column: str = "created_at"
    eager_relations: Tuple[str, ...] = ()
    public_scope: Optional[Callable[[], ColumnElement]] = None

    def order_by(self) -> Tuple[ColumnElement, ...]:
        """Newest first; id breaks timestamp ties so pages never overlap."""
        return (
            getattr(self.model, self.order_column).desc(),
            self.model.id.desc(),
        )

    def load_options(self) -> list:
        return [selectinload(getattr(self.model, rel)) for rel in self.eager_relations]


def _contains(attr) -> TextMatcher:
    return lambda term: attr.icontains(term, autoescape=True)


class json_array_elements(FunctionElement):
    """Rows of a JSON array of strings, one per element, in a column named value."""

    name = "json_array_elements"
    inherit_cache = True


@compiles(json_array_elements)
def _compile_json_each(element, compiler, **kw):
    return "json_each(%s)" % compiler.process(element.clauses, **kw)


@compiles(json_array_elements, "postgresql")
def _compile_json_array_elements_text(element, compiler, **kw):
    return "json_array_elements_text(%s)" % compiler.process(element.clauses, **kw)


def _any_element_contains(attr) -> TextMatcher:
    """Match when at least one element of a JSON string list contains the term."""

    def match(term: str) -> ColumnElement:
        elements = json_array_elements(attr).table_valued(column("value", String))
        return exists(
            select(elements.c.value)
            .select_from(elements)
            .where(elements.c.value.icontains(term, autoescape=True))
        )

    return match


def _id_contains(attr) -> TextMatcher:
    """
    Match a fragment of the record id.

    Dashes are dropped on both sides since SQLite stores UUIDs as bare hex
    while PostgreSQL renders them dashed.
    """

    def match(term: str) -> ColumnElement:
        digits = term.replace("-", "")
        if not digits:
            return false()
        return func.replace(cast(attr, String), "-", "", type_=String).icontains(digits, autoescape=True)

    return match


def _related_name(relation) -> TextMatcher:
    return lambda term: relation.any(User.name.icontains(term, autoescape=True))


def _reviewer_name(relation) -> TextMatcher:
    return lambda term: relation.has(User.name.icontains(term, autoescape=True))


_REVIEWER_STATUS = StructuredField(column="reviewer_status", enum=ReviewerStatus)


RESOURCE_SPECS: Dict[ResourceKind, ResourceSpec] = {
    ResourceKind.PROJECTS: ResourceSpec(
        kind=ResourceKind.PROJECTS,
        model=Project,
        owner_relation="members",
        supervisory_relation="faculty_advisors",
        text_matchers=(
            _id_contains(Project.id),
            _contains(Project.title),
            _contains(Project.description),
            _contains(Project.project_type),
            _related_name(Project.members),
            _related_name(Project.faculty_advisors),
            _reviewer_name(Project.reviewer),
        ),
        structured={
            "status": StructuredField(column="status", enum=ProjectStatus),
            "reviewer_status": _REVIEWER_STATUS,
        },
        eager_relations=("members", "faculty_advisors", "reviewer"),
    ),
    ResourceKind.PAPERS: ResourceSpec(
        kind=ResourceKind.PAPERS,
        model=Paper,
        owner_relation="authors",
        supervisory_relation="faculty_advisors",
        text_matchers=(
            _id_contains(Paper.id),
            _contains(Paper.title),
            _contains(Paper.abstract),
            _any_element_contains(Paper.keywords),
        ),
        structured={
            "status": StructuredField(column="status", enum=PaperStatus),
            "reviewer_status": _REVIEWER_STATUS,
        },
        order_column="submission_date",
        eager_relations=("authors", "faculty_advisors", "reviewer"),
        public_scope=lambda: Paper.status == PaperStatus.PUBLISH.value,
    ),
    ResourceKind.ACHIEVEMENTS: ResourceSpec(
        kind=ResourceKind.ACHIEVEMENTS,
        model=Achievement,
        owner_relation=None,
        supervisory_relation=None,
        text_matchers=(
            _contains(Achievement.title),
            _contains(Achievement.description),
            _contains(Achievement.category),
        ),
        public_scope=lambda: Achievement.home_page_visibility.is_(True),
    ),
    ResourceKind.USERS: ResourceSpec(
        kind=ResourceKind.USERS,
        model=User,
        owner_relation=SELF,
        supervisory_relation=None,
        text_matchers=(
            _id_contains(User.id),
            _contains(User.name),
            _contains(User.email),
        ),
        structured={
            "user_type": StructuredField(column="user_type", enum=UserRole),
            "department": StructuredField(column="department"),
            "is_verified": StructuredField(column="is_verified", boolean=True),
        },
    ),
}


def get_spec(kind) -> ResourceSpec:
    """Look up the registry entry for a kind given as enum or wire string."""
    try:
        return RESOURCE_SPECS[ResourceKind(kind)]
    except ValueError:
        raise ValidationError(f"Unknown resource kind: {kind}") from None
