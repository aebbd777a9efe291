"""Note Service — encrypted note operations with per-owner access control.

Invariants:
    - Every identity-scoped operation loads, then checks existence (404), then
      ownership (403), before any mutation or decryption
    - Plaintext never reaches the repository; ciphertext never reaches the caller
    - update() applies only the fields present in `changes` (presence, not truthiness)
    - updated_at is bumped by every mutating operation
    - duplicate_to_end_of_month() copies ciphertext verbatim (no re-encryption)

Design Decisions:
    - Caller id is an explicit argument: no ambient request state
    - Cipher and repository injected: the concrete primitive and store are swappable
    - Duplication is best-effort sequential inserts; a failure midway leaves the
      duplicates already saved and propagates (no rollback across records)
    - Load-check-save is not transactional: concurrent writers are last-write-wins
"""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from calnotes.core.access_guard import ensure_found, ensure_owner
from calnotes.core.domain_types import NoteId
from calnotes.core.errors import AccessDeniedError, NoteValidationError
from calnotes.core.note_crypto import open_blocks, open_text, seal_blocks, seal_text
from calnotes.core.repository_protocols import Cipher, NoteLike, NoteRepository
from calnotes.core.schedule_dates import (
    duplication_dates, normalize_to_day, to_utc, validate_repeat_interval,
)
from calnotes.models.note import Note

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "subject", "content_blocks", "assigned_date"})


class NoteService:
    """Orchestrates access guard, cipher and repository for note operations."""

    def __init__(self, repository: NoteRepository, cipher: Cipher):
        self.repository = repository
        self.cipher = cipher

    # ─── Create / Read ──────────────────────────────────────────

    async def create(
        self,
        owner_id: str,
        content_blocks: Iterable[Any],
        assigned_date: datetime | str | None,
        title: str | None = None,
        subject: str | None = None,
        calendar_id: str | None = None,
    ) -> NoteId:
        """Encrypt and persist a new note owned by owner_id. Returns its id."""
        if assigned_date is None:
            raise NoteValidationError("Missing assigned_date", "assigned_date")
        note = Note(
            owner_id=str(owner_id),
            calendar_id=calendar_id,
            title=seal_text(self.cipher, title),
            subject=seal_text(self.cipher, subject),
            content_blocks=seal_blocks(self.cipher, content_blocks or []),
            assigned_date=to_utc(assigned_date),
            is_done=False,
        )
        await self.repository.add(note)
        logger.info(
            "Note created",
            extra={"note_id": str(note.id), "owner_id": str(owner_id)},
        )
        return note.id

    async def get_one(self, note_id: NoteId, caller_id: str) -> dict:
        """Full decrypted note, including content blocks."""
        note = await self._load_owned(note_id, caller_id)
        return {
            **self._summary(note),
            "content_blocks": open_blocks(self.cipher, note.content_blocks),
            "created_at": to_utc(note.created_at),
            "updated_at": to_utc(note.updated_at),
        }

    async def get_all_for_owner(self, caller_id: str) -> list[dict]:
        """Summaries of every note the caller owns. Blocks are not decrypted."""
        notes = await self.repository.list_by_owner(str(caller_id))
        return [self._summary(note) for note in notes]

    async def get_all_for_calendar(self, caller_id: str, calendar_id: str) -> list[dict]:
        """Summaries of the caller's notes in one calendar."""
        notes = await self.repository.list_by_owner(str(caller_id), calendar_id)
        return [self._summary(note) for note in notes]

    # ─── Mutations ──────────────────────────────────────────────

    async def update(
        self, note_id: NoteId, caller_id: str, changes: Mapping[str, Any],
    ) -> None:
        """Overwrite only the fields present in changes."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise NoteValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                sorted(unknown)[0],
            )
        note = await self._load_owned(note_id, caller_id)

        if "title" in changes:
            note.title = seal_text(self.cipher, changes["title"])
        if "subject" in changes:
            note.subject = seal_text(self.cipher, changes["subject"])
        if "content_blocks" in changes:
            note.content_blocks = seal_blocks(self.cipher, changes["content_blocks"] or [])
        if "assigned_date" in changes:
            if changes["assigned_date"] is None:
                raise NoteValidationError("assigned_date cannot be null", "assigned_date")
            note.assigned_date = to_utc(changes["assigned_date"])

        note.updated_at = _now()
        await self.repository.save(note)

    async def delete(self, note_id: NoteId, caller_id: str) -> None:
        note = await self._load_owned(note_id, caller_id)
        await self.repository.delete(note)
        logger.info(
            "Note deleted",
            extra={"note_id": str(note_id), "owner_id": str(caller_id)},
        )

    async def toggle_done(self, note_id: NoteId, caller_id: str) -> bool:
        """Flip is_done and return the new value."""
        note = await self._load_owned(note_id, caller_id)
        note.is_done = not note.is_done
        note.updated_at = _now()
        await self.repository.save(note)
        return note.is_done

    async def reschedule(
        self, note_id: NoteId, caller_id: str, assigned_date: datetime | str | None,
    ) -> datetime:
        """Move the note to midnight UTC of assigned_date's day. Returns the stored date."""
        new_date = normalize_to_day(assigned_date)
        note = await self._load_owned(note_id, caller_id)
        note.assigned_date = new_date
        note.updated_at = _now()
        await self.repository.save(note)
        return new_date

    async def duplicate_to_end_of_month(
        self, note_id: NoteId, caller_id: str, repeat_interval: int,
    ) -> int:
        """Copy the note every repeat_interval days through the end of its month."""
        interval = validate_repeat_interval(repeat_interval)
        source = await self._load_owned(note_id, caller_id)

        created = 0
        for day in duplication_dates(source.assigned_date, interval):
            await self.repository.add(Note(
                owner_id=source.owner_id,
                calendar_id=source.calendar_id,
                title=source.title,
                subject=source.subject,
                content_blocks=[dict(block) for block in source.content_blocks],
                assigned_date=day,
                is_done=False,
            ))
            created += 1

        logger.info(
            f"Duplicated {created} notes to end of month",
            extra={
                "note_id": str(note_id),
                "repeat_interval": interval,
                "duplicated_count": created,
            },
        )
        return created

    # ─── Helpers ────────────────────────────────────────────────

    async def _load_owned(self, note_id: NoteId, caller_id: str) -> NoteLike:
        note = ensure_found(await self.repository.get(note_id), note_id)
        try:
            ensure_owner(note.owner_id, caller_id, note_id)
        except AccessDeniedError:
            logger.warning(
                "Access denied to note",
                extra={"note_id": str(note_id), "owner_id": str(caller_id)},
            )
            raise
        return note

    def _summary(self, note: NoteLike) -> dict:
        return {
            "id": note.id,
            "title": open_text(self.cipher, note.title, "title"),
            "subject": open_text(self.cipher, note.subject, "subject"),
            "assigned_date": to_utc(note.assigned_date),
            "calendar_id": note.calendar_id,
            "is_done": note.is_done,
        }


def _now() -> datetime:
    return datetime.now(timezone.utc)
