"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so a fake cipher in tests needs no base class
    - Cipher is sync: the default adapter is CPU-bound Fernet; the repository is async
      because every implementation does IO
"""

from datetime import datetime
from typing import Protocol

from calnotes.core.domain_types import NoteId


class Cipher(Protocol):
    """Opaque encrypt/decrypt capability supplied by a trusted component."""
    def encrypt(self, plaintext: str) -> str: ...
    def decrypt(self, ciphertext: str) -> str: ...


class NoteLike(Protocol):
    """Structural contract for stored Note records passed to the service.

    Avoids coupling the service to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: NoteId
    owner_id: str
    calendar_id: str | None
    title: str
    subject: str
    content_blocks: list
    assigned_date: datetime
    is_done: bool
    created_at: datetime
    updated_at: datetime


class NoteRepository(Protocol):
    """Contract for note persistence — implemented by shell."""
    async def add(self, note: NoteLike) -> NoteLike: ...
    async def get(self, note_id: NoteId) -> NoteLike | None: ...
    async def list_by_owner(
        self, owner_id: str, calendar_id: str | None = None,
    ) -> list[NoteLike]: ...
    async def save(self, note: NoteLike) -> None: ...
    async def delete(self, note: NoteLike) -> None: ...
