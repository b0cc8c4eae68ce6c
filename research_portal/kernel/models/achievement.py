"""
Achievement showcase model.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from research_portal.kernel.models.base import Base, TimestampMixin, generate_uuid


class Achievement(Base, TimestampMixin):
    """Department achievement; no owner and no supervising faculty."""

    __tablename__ = "achievements"

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
    category: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    image: Mapped[Optional[str]] = mapped_column(
        String(1000),
        nullable=True,
    )
    link: Mapped[Optional[str]] = mapped_column(
        String(1000),
        nullable=True,
    )
    achievement_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    home_page_visibility: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Achievement {self.title[:50]}>"
