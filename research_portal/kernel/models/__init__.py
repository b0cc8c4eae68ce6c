"""
Kernel Data Models

SQLAlchemy models for the records the access layer lists and counts.
"""

from research_portal.kernel.models.base import Base, TimestampMixin, generate_uuid
from research_portal.kernel.models.user import User, UserRole
from research_portal.kernel.models.project import (
    Project,
    ProjectStatus,
    ReviewerStatus,
    project_members,
    project_advisors,
)
from research_portal.kernel.models.paper import (
    Paper,
    PaperStatus,
    paper_authors,
    paper_advisors,
)
from research_portal.kernel.models.achievement import Achievement

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "generate_uuid",
    # User
    "User",
    "UserRole",
    # Project
    "Project",
    "ProjectStatus",
    "ReviewerStatus",
    "project_members",
    "project_advisors",
    # Paper
    "Paper",
    "PaperStatus",
    "paper_authors",
    "paper_advisors",
    # Achievement
    "Achievement",
]
