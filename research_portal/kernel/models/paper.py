"""
Research paper model.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, func, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from research_portal.kernel.models.base import Base, TimestampMixin, generate_uuid, user_link_table
from research_portal.kernel.models.project import ReviewerStatus

if TYPE_CHECKING:
    from research_portal.kernel.models.user import User


class PaperStatus(str, Enum):
    """Publication status of a paper."""
    PENDING = "PENDING"
    PUBLISH = "PUBLISH"
    REJECT = "REJECT"


paper_authors = user_link_table("paper_authors", "papers", "paper_id")
paper_advisors = user_link_table("paper_advisors", "papers", "paper_id")


class Paper(Base, TimestampMixin):
    """Research paper authored by students, supervised by faculty."""

    __tablename__ = "papers"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )
    abstract: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    file_path: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
    )
    keywords: Mapped[List[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    status: Mapped[PaperStatus] = mapped_column(
        String(50),
        default=PaperStatus.PENDING,
        nullable=False,
        index=True,
    )
    submission_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
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

    # Relationships
    authors: Mapped[List["User"]] = relationship(
        "User",
        secondary=paper_authors,
    )
    faculty_advisors: Mapped[List["User"]] = relationship(
        "User",
        secondary=paper_advisors,
    )
    reviewer: Mapped[Optional["User"]] = relationship(
        "User",
        foreign_keys=[reviewer_id],
    )

    def __repr__(self) -> str:
        return f"<Paper {self.title[:50]}>"
