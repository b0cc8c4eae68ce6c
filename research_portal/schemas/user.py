"""
User schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from research_portal.kernel.models.user import UserRole


class UserSummary(BaseModel):
    """Member, advisor or reviewer embedded in another record."""

    id: uuid.UUID
    name: str
    email: str

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """User directory entry."""

    id: uuid.UUID
    name: str
    email: str
    user_type: UserRole
    department: Optional[str] = None
    is_verified: bool
    profile_image: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
