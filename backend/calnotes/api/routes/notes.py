"""Notes Routes — HTTP surface for NoteService.

Invariants:
    - Every route requires a caller id (get_caller_id) and passes it explicitly
    - Routes never touch the cipher or repository directly
    - Domain errors propagate to the global CalNotesError handler

Design Decisions:
    - PUT for partial update: unset body fields are left untouched
    - PATCH for the two single-purpose mutations (toggle, change-date)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from calnotes.api.dependencies import get_caller_id, get_note_service
from calnotes.schemas.note import (
    DuplicateRequest, DuplicateResponse, MessageResponse, NoteCreate,
    NoteCreatedResponse, NoteDetail, NoteSummary, NoteUpdate,
    RescheduleRequest, RescheduleResponse, ToggleResponse,
)
from calnotes.services.note_service import NoteService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/notes", tags=["notes"])


@router.post(
    "", response_model=NoteCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_note(
    body: NoteCreate,
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    """Create an encrypted note owned by the caller."""
    note_id = await service.create(
        owner_id=caller_id,
        title=body.title,
        subject=body.subject,
        content_blocks=body.content_blocks,
        assigned_date=body.assigned_date,
        calendar_id=body.calendar_id,
    )
    return NoteCreatedResponse(message="Note saved successfully", note_id=note_id)


@router.get("", response_model=list[NoteSummary])
async def list_notes(
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    """List summaries of the caller's notes."""
    return await service.get_all_for_owner(caller_id)


@router.get("/{note_id}", response_model=NoteDetail)
async def get_note(
    note_id: UUID,
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    """Get one decrypted note."""
    return await service.get_one(note_id, caller_id)


@router.put("/{note_id}", response_model=MessageResponse)
async def update_note(
    note_id: UUID,
    body: NoteUpdate,
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    """Update the fields present in the body."""
    await service.update(note_id, caller_id, body.changes())
    return MessageResponse(message="Note updated successfully")


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: UUID,
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    await service.delete(note_id, caller_id)
    return MessageResponse(message="Note deleted successfully")


@router.patch("/{note_id}/toggle", response_model=ToggleResponse)
async def toggle_note_done(
    note_id: UUID,
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    is_done = await service.toggle_done(note_id, caller_id)
    return ToggleResponse(message="Note status updated", is_done=is_done)


@router.patch("/{note_id}/change-date", response_model=RescheduleResponse)
async def change_note_date(
    note_id: UUID,
    body: RescheduleRequest,
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    """Reschedule to midnight UTC of the given day."""
    new_date = await service.reschedule(note_id, caller_id, body.assigned_date)
    return RescheduleResponse(
        message="Note date updated successfully", assigned_date=new_date,
    )


@router.post(
    "/{note_id}/repeat", response_model=DuplicateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def repeat_note(
    note_id: UUID,
    body: DuplicateRequest,
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    """Duplicate the note every repeat_interval days until the end of its month."""
    count = await service.duplicate_to_end_of_month(
        note_id, caller_id, body.repeat_interval,
    )
    return DuplicateResponse(
        message=f"Duplicated {count} notes to end of month.",
        duplicated_count=count,
    )
