"""SQL Note Repository — NoteRepository implementation over an AsyncSession.

Invariants:
    - Every write commits immediately: one record per transaction
    - A failed commit is rolled back and re-raised as DatabaseError
    - list_by_owner never returns rows of another owner

Design Decisions:
    - Commit per write over unit-of-work: month duplication is best-effort
      sequential inserts, each durable on its own
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from calnotes.core.domain_types import NoteId
from calnotes.core.errors import DatabaseError
from calnotes.models.note import Note

logger = logging.getLogger(__name__)


class SqlNoteRepository:
    """Note persistence backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, note: Note) -> Note:
        self.db.add(note)
        await self._commit("insert")
        return note

    async def get(self, note_id: NoteId) -> Note | None:
        try:
            return await self.db.get(Note, note_id)
        except SQLAlchemyError as e:
            logger.error(f"DB error loading note: {e}", extra={"note_id": str(note_id)})
            raise DatabaseError("Could not load note", "select")

    async def list_by_owner(
        self, owner_id: str, calendar_id: str | None = None,
    ) -> list[Note]:
        query = (
            select(Note)
            .where(Note.owner_id == owner_id)
            .order_by(Note.assigned_date, Note.created_at)
        )
        if calendar_id is not None:
            query = query.where(Note.calendar_id == calendar_id)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"DB error listing notes: {e}", extra={"owner_id": owner_id})
            raise DatabaseError("Could not list notes", "select")
        return list(result.scalars().all())

    async def save(self, note: Note) -> None:
        self.db.add(note)
        await self._commit("update")

    async def delete(self, note: Note) -> None:
        await self.db.delete(note)
        await self._commit("delete")

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"DB {operation} failed: {e}")
            raise DatabaseError("Could not persist note", operation)
