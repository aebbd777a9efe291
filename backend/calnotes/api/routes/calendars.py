"""Calendar Routes — notes of one calendar, scoped to the caller.

Invariants:
    - Only the caller's notes are returned, even when other owners share the calendar id
"""

from fastapi import APIRouter, Depends

from calnotes.api.dependencies import get_caller_id, get_note_service
from calnotes.schemas.note import NoteSummary
from calnotes.services.note_service import NoteService

router = APIRouter(prefix="/api/v1/calendars", tags=["calendars"])


@router.get("/{calendar_id}/notes", response_model=list[NoteSummary])
async def list_calendar_notes(
    calendar_id: str,
    caller_id: str = Depends(get_caller_id),
    service: NoteService = Depends(get_note_service),
):
    """List summaries of the caller's notes in calendar_id."""
    return await service.get_all_for_calendar(caller_id, calendar_id)
