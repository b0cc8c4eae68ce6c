"""
Paper schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from research_portal.kernel.models.paper import PaperStatus
from research_portal.kernel.models.project import ReviewerStatus
from research_portal.schemas.user import UserSummary


class PaperResponse(BaseModel):
    """Research paper with authors, advisors and reviewer."""

    id: uuid.UUID
    title: str
    abstract: str
    file_path: str
    keywords: List[str] = []
    status: PaperStatus
    reviewer_status: ReviewerStatus
    submission_date: datetime
    authors: List[UserSummary] = []
    faculty_advisors: List[UserSummary] = []
    reviewer: Optional[UserSummary] = None
    created_at: datetime

    class Config:
        from_attributes = True
