"""
MemoPad Backend — Memo SQLAlchemy Model
=========================================

What:  ORM model representing the `memos` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by MemoRepository for CRUD and by the test suite to build the schema.

Portable column types:
    The production database is PostgreSQL (native UUID id, TEXT[] tags).
    Tests run on SQLite, so each PostgreSQL type is attached as a dialect
    variant of a generic type (VARCHAR(36) id, JSON tags).

Index on created_at DESC:
    Serves the only list query: all memos, most recent first.
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, Index, String, Text, func
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import DateTime

from app.database import Base

MEMOS_TABLE = "memos"

# UUID rendered as text on the Python side regardless of backend
MemoIdType = String(36).with_variant(postgresql.UUID(as_uuid=False), "postgresql")

# Ordered list of strings; order is meaningful, duplicates allowed
TagListType = JSON().with_variant(postgresql.ARRAY(Text()), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_memo_id() -> str:
    return str(uuid.uuid4())


class MemoRow(Base):
    """
    A stored memo row.

    Lifecycle:
        1. Inserted by create/seed; id, created_at, updated_at assigned here
        2. title/content/category/tags overwritten in place by update
        3. Hard-deleted by delete or clear-all (no soft delete, no history)
    """

    __tablename__ = MEMOS_TABLE

    # ── Primary Key ───────────────────────────────────────────────────────
    # Migration adds server_default gen_random_uuid() on PostgreSQL
    id: Mapped[str] = mapped_column(
        MemoIdType,
        primary_key=True,
        default=_new_memo_id,
        comment="Opaque memo identifier, immutable after insert",
    )

    # ── Content ───────────────────────────────────────────────────────────
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Short memo title",
    )

    # Free-form text; may contain Markdown, never parsed server-side
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Memo body text",
    )

    # Open label set (work, study, idea, personal, ...), not an enum
    category: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free-text category label",
    )

    tags: Mapped[List[str]] = mapped_column(
        TagListType,
        nullable=False,
        default=list,
        comment="Ordered tag list as supplied by the caller",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        comment="When this memo was created (UTC)",
    )

    # PostgreSQL also refreshes this in a BEFORE UPDATE trigger (migration 001)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
        comment="When this memo was last modified (UTC)",
    )

    __table_args__ = (
        Index("idx_memos_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<MemoRow(id={self.id}, title='{self.title}', "
            f"created_at='{self.created_at}')>"
        )
