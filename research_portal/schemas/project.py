"""
Project schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from research_portal.kernel.models.project import ProjectStatus, ReviewerStatus
from research_portal.schemas.user import UserSummary


class ProjectResponse(BaseModel):
    """Ongoing project with its members, advisors and reviewer."""

    id: uuid.UUID
    title: str
    description: str
    project_type: Optional[str] = None
    project_tags: List[str] = []
    project_link: Optional[str] = None
    status: ProjectStatus
    reviewer_status: ReviewerStatus
    reviewer_comments: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    members: List[UserSummary] = []
    faculty_advisors: List[UserSummary] = []
    reviewer: Optional[UserSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
