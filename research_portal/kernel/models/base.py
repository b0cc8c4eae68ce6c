"""
Base model with common fields and utilities.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Table, func, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    # Generic Uuid type works on both PostgreSQL and SQLite
    type_annotation_map = {
        uuid.UUID: Uuid(),
    }


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def generate_uuid() -> uuid.UUID:
    """Generate a new UUID."""
    return uuid.uuid4()


def user_link_table(name: str, parent_table: str, parent_column: str) -> Table:
    """Many-to-many table linking a record to users."""
    return Table(
        name,
        Base.metadata,
        Column(
            parent_column,
            Uuid(),
            ForeignKey(f"{parent_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            "user_id",
            Uuid(),
            ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )
