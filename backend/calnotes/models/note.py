"""Note ORM — persists encrypted calendar notes.

Invariants:
    - id is UUID primary key, generated on construction
    - owner_id is set once at creation and never reassigned
    - title/subject hold ciphertext, or "" for "no value"
    - content_blocks is an ordered list of {"type": str, "data": ciphertext}

Design Decisions:
    - JSON column for content_blocks: block order and type tags stored as-is
    - owner_id indexed: every list query filters by owner
    - owner_id/calendar_id are strings: identities come from the auth collaborator
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from calnotes.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """Note record — one scheduled task/event with encrypted content."""
    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
    )
    calendar_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    subject: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content_blocks: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    assigned_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    is_done: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    def __init__(self, **kwargs):
        # Python-side defaults so a fresh instance is usable before flush
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("is_done", False)
        kwargs.setdefault("title", "")
        kwargs.setdefault("subject", "")
        kwargs.setdefault("content_blocks", [])
        now = _utcnow()
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        super().__init__(**kwargs)
