"""Request Dependencies — caller identity, cipher and service wiring.

Invariants:
    - Caller identity comes from the X-User-Id header set by the upstream auth
      gateway; a missing or blank header is 401, never an anonymous caller
    - One FernetCipher per process (key derivation is not repeated per request)
    - NoteService is built per request around the request's AsyncSession

Design Decisions:
    - Token verification is not done here: the gateway in front of this service owns it
"""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from calnotes.config import get_settings
from calnotes.core.repository_protocols import Cipher
from calnotes.infrastructure.database import get_db
from calnotes.infrastructure.fernet_cipher import FernetCipher
from calnotes.infrastructure.note_repository import SqlNoteRepository
from calnotes.services.note_service import NoteService


async def get_caller_id(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
) -> str:
    """Authenticated caller id supplied by the gateway."""
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED, detail="Missing caller identity",
        )
    return x_user_id.strip()


@lru_cache
def get_cipher() -> Cipher:
    return FernetCipher(get_settings().note_encryption_key)


async def get_note_service(
    db: AsyncSession = Depends(get_db),
    cipher: Cipher = Depends(get_cipher),
) -> NoteService:
    return NoteService(SqlNoteRepository(db), cipher)
