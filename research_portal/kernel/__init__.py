"""
Kernel Layer

- Data models (users, projects, papers, achievements)
- Identity (bearer token verification)
- Access core (role-scoped visibility, filtering, pagination)

Routes never build visibility rules of their own; every listing, lookup and
count goes through the access core.
"""

from research_portal.kernel.models import (
    User,
    UserRole,
    Project,
    ProjectStatus,
    ReviewerStatus,
    Paper,
    PaperStatus,
    Achievement,
)

__all__ = [
    # User & Identity
    "User",
    "UserRole",
    # Project
    "Project",
    "ProjectStatus",
    "ReviewerStatus",
    # Paper
    "Paper",
    "PaperStatus",
    # Achievement
    "Achievement",
]
