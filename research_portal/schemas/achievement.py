"""
Achievement schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AchievementResponse(BaseModel):
    """Achievement showcase entry."""

    id: uuid.UUID
    title: str
    description: str
    category: str
    image: Optional[str] = None
    link: Optional[str] = None
    achievement_date: Optional[datetime] = None
    home_page_visibility: bool
    created_at: datetime

    class Config:
        from_attributes = True
