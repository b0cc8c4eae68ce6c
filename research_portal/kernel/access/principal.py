"""
Authenticated principal and identifier parsing.
"""

import uuid
from dataclasses import dataclass
from typing import Union

from research_portal.kernel.access.errors import AuthorizationError, ValidationError
from research_portal.kernel.models.user import UserRole


@dataclass(frozen=True)
class Principal:
    """Caller identity for one request: who, and in which role."""

    id: uuid.UUID
    role: UserRole

    @classmethod
    def from_claims(cls, subject: Union[str, uuid.UUID], role: str) -> "Principal":
        """
        Build a principal from token claims.

        Raises:
            ValidationError: subject is not a UUID
            AuthorizationError: role is not one of the known roles
        """
        return cls(id=parse_identifier(subject), role=parse_role(role))


def parse_role(value: Union[str, UserRole]) -> UserRole:
    """Map a role claim to UserRole; anything unknown is denied."""
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(value)
    except ValueError:
        raise AuthorizationError(f"Unrecognized role: {value}") from None


def parse_identifier(value: Union[str, uuid.UUID]) -> uuid.UUID:
    """Parse a record identifier from the wire."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError("Invalid identifier format") from None
