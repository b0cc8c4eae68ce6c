"""
Search term and structured filter handling.

Wire values arrive as strings. build_filter() validates every one of them
against the resource's registry entry and returns a FilterPredicate, so a
bad enum value is rejected before a query is ever issued.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from research_portal.kernel.access.errors import ValidationError
from research_portal.kernel.access.resources import ResourceKind, StructuredField, get_spec


@dataclass(frozen=True)
class SearchFilter:
    """Optional free-text term plus optional structured filters, as received."""

    query: Optional[str] = None
    status: Optional[str] = None
    reviewer_status: Optional[str] = None
    user_type: Optional[str] = None
    department: Optional[str] = None
    is_verified: Optional[str] = None

    def structured_values(self) -> Dict[str, str]:
        """Structured filters that were actually supplied."""
        values = {
            "status": self.status,
            "reviewer_status": self.reviewer_status,
            "user_type": self.user_type,
            "department": self.department,
            "is_verified": self.is_verified,
        }
        return {
            name: value.strip()
            for name, value in values.items()
            if value is not None and value.strip()
        }


@dataclass(frozen=True)
class FilterPredicate:
    """Validated search term and exact-match conditions for one kind."""

    kind: ResourceKind
    term: Optional[str] = None
    conditions: Tuple[Tuple[str, Any], ...] = field(default_factory=tuple)

    def clause(self) -> ColumnElement:
        spec = get_spec(self.kind)
        parts = [
            getattr(spec.model, column) == value
            for column, value in self.conditions
        ]
        if self.term:
            parts.append(or_(*(match(self.term) for match in spec.text_matchers)))
        if not parts:
            return true()
        return and_(*parts)


def _coerce(name: str, field_spec: StructuredField, raw: str) -> Any:
    if field_spec.enum is not None:
        try:
            return field_spec.enum(raw).value
        except ValueError:
            allowed = ", ".join(member.value for member in field_spec.enum)
            raise ValidationError(
                f"Invalid {name} value '{raw}'. Expected one of: {allowed}"
            ) from None
    if field_spec.boolean:
        lowered = raw.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValidationError(f"Invalid {name} value '{raw}'. Expected true or false")
    return raw


def build_filter(kind: ResourceKind, search_filter: Optional[SearchFilter]) -> FilterPredicate:
    """
    Validate a SearchFilter against a resource kind.

    The term is trimmed; an empty term applies no text filter. Structured
    filters are AND-combined and must be supported by the kind.

    Raises:
        ValidationError: unknown enum value, bad boolean, or a filter the
            kind does not support
    """
    spec = get_spec(kind)
    search_filter = search_filter or SearchFilter()

    conditions = []
    for name, raw in search_filter.structured_values().items():
        field_spec = spec.structured.get(name)
        if field_spec is None:
            raise ValidationError(f"Filter '{name}' is not supported for {spec.kind.value}")
        conditions.append((field_spec.column, _coerce(name, field_spec, raw)))

    term = (search_filter.query or "").strip() or None

    return FilterPredicate(kind=spec.kind, term=term, conditions=tuple(conditions))
