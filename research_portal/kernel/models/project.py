"""
Ongoing research project models.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from research_portal.kernel.models.base import Base, TimestampMixin, generate_uuid, user_link_table

if TYPE_CHECKING:
    from research_portal.kernel.models.user import User


class ProjectStatus(str, Enum):
    """Project lifecycle status."""
    UPLOAD = "UPLOAD"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    PUBLISH = "PUBLISH"
    CANCELLED = "CANCELLED"


class ReviewerStatus(str, Enum):
    """Reviewer decision on a submission (shared by projects and papers)."""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    NEEDS_UPDATES = "NEEDS_UPDATES"


project_members = user_link_table("project_members", "projects", "project_id")
project_advisors = user_link_table("project_advisors", "projects", "project_id")


class Project(Base, TimestampMixin):
    """Ongoing project submitted by student members, supervised by faculty."""

    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    project_type: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    project_tags: Mapped[List[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    project_link: Mapped[Optional[str]] = mapped_column(
        String(1000),
        nullable=True,
    )
    status: Mapped[ProjectStatus] = mapped_column(
        String(50),
        default=ProjectStatus.UPLOAD,
        nullable=False,
        index=True,
    )
    start_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    end_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Review
    reviewer_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    reviewer_status: Mapped[ReviewerStatus] = mapped_column(
        String(50),
        default=ReviewerStatus.PENDING,
        nullable=False,
    )
    reviewer_comments: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    members: Mapped[List["User"]] = relationship(
        "User",
        secondary=project_members,
    )
    faculty_advisors: Mapped[List["User"]] = relationship(
        "User",
        secondary=project_advisors,
    )
    reviewer: Mapped[Optional["User"]] = relationship(
        "User",
        foreign_keys=[reviewer_id],
    )

    def __repr__(self) -> str:
        return f"<Project {self.title[:50]}>"
