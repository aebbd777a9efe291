"""Note Schemas — Pydantic models for the notes API boundary.

Invariants:
    - Requests accept snake_case and the camelCase names used by the calendar client
    - NoteUpdate.changes() contains exactly the fields the client sent, even when
      the value is "" or null (presence, not truthiness)
    - Responses never carry ciphertext

Design Decisions:
    - ContentBlockIn.data is Any: blocks carry arbitrary JSON payloads
    - repeat_interval range is checked by the service, not Field(ge, le), so the
      error shape matches every other domain validation error
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from calnotes.core.domain_types import BlockType


class _ClientModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentBlockIn(_ClientModel):
    """One typed fragment of a note body."""
    type: BlockType = BlockType.TEXT
    data: Any = None


class NoteCreate(_ClientModel):
    """Note creation — title/subject optional, assigned_date required."""
    title: str | None = Field(None, max_length=500)
    subject: str | None = Field(None, max_length=500)
    content_blocks: list[ContentBlockIn] = Field(default_factory=list)
    assigned_date: datetime
    calendar_id: str | None = Field(None, max_length=64)


class NoteUpdate(_ClientModel):
    """Partial update — unset fields are left untouched."""
    title: str | None = Field(None, max_length=500)
    subject: str | None = Field(None, max_length=500)
    content_blocks: list[ContentBlockIn] | None = None
    assigned_date: datetime | None = None

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class RescheduleRequest(_ClientModel):
    assigned_date: datetime | None = None


class DuplicateRequest(_ClientModel):
    repeat_interval: int | None = None


class ContentBlockOut(BaseModel):
    type: str
    data: Any = None


class NoteSummary(BaseModel):
    """List-view note: no content blocks."""
    id: UUID
    title: str
    subject: str
    assigned_date: datetime
    calendar_id: str | None
    is_done: bool


class NoteDetail(NoteSummary):
    """Full decrypted note."""
    content_blocks: list[ContentBlockOut]
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str


class NoteCreatedResponse(MessageResponse):
    note_id: UUID


class ToggleResponse(MessageResponse):
    is_done: bool


class RescheduleResponse(MessageResponse):
    assigned_date: datetime


class DuplicateResponse(MessageResponse):
    duplicated_count: int
