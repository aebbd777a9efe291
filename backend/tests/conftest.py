"""Root conftest — shared test configuration, DB fixtures and a fake cipher.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - FakeCipher is deterministic and reversible, and rejects foreign ciphertext
    - Environment defaults are set before calnotes.config is imported

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for service/route tests
    - FakeCipher over FernetCipher in service tests: stored values are predictable
"""

import base64
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("NOTE_ENCRYPTION_KEY", "test-note-encryption-key")

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from calnotes.core.errors import CipherError
from calnotes.db.base import Base
from calnotes.infrastructure.note_repository import SqlNoteRepository
from calnotes.services.note_service import NoteService
import calnotes.models  # noqa: F401


class FakeCipher:
    """Reversible stand-in: "enc:" + base64(plaintext)."""

    PREFIX = "enc:"

    def __init__(self):
        self.encrypt_calls = 0

    def encrypt(self, plaintext: str) -> str:
        self.encrypt_calls += 1
        return self.PREFIX + base64.b64encode(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        if not ciphertext.startswith(self.PREFIX):
            raise CipherError("decrypt")
        return base64.b64decode(ciphertext[len(self.PREFIX):]).decode()


@pytest.fixture
def cipher():
    return FakeCipher()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def repository(test_db):
    return SqlNoteRepository(test_db)


@pytest.fixture
def service(repository, cipher):
    return NoteService(repository, cipher)
