"""Access Guard — pure existence and ownership checks for note operations.

Invariants:
    - Existence is checked before ownership (404 before 403)
    - Ids are compared as strings: owner ids may arrive as ints, UUIDs or str
    - Fail-closed: a missing owner id on either side is a denial

Design Decisions:
    - Raise instead of returning error dicts: every caller aborts on failure,
      and the global handler maps the exception to the REST envelope
"""

from typing import TypeVar

from calnotes.core.errors import AccessDeniedError, NoteNotFoundError

T = TypeVar("T")


def ensure_found(note: T | None, note_id: object) -> T:
    """Return the note, or raise NoteNotFoundError when it is absent."""
    if note is None:
        raise NoteNotFoundError(str(note_id))
    return note


def is_owner(note_owner_id: object, caller_id: object) -> bool:
    if note_owner_id is None or caller_id is None:
        return False
    caller = str(caller_id)
    return bool(caller) and str(note_owner_id) == caller


def ensure_owner(note_owner_id: object, caller_id: object, note_id: object) -> None:
    """Raise AccessDeniedError unless caller_id owns the note."""
    if not is_owner(note_owner_id, caller_id):
        raise AccessDeniedError(str(note_id))
