"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - NoteId wraps UUID; owner and calendar ids stay plain str (caller-supplied)
    - Repeat interval bounds are inclusive (1..7 days)
    - Content block tags are a closed set — no raw string matching in domain logic

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

NoteId = NewType("NoteId", UUID)


# ─── Bounds ──────────────────────────────────────────────────────

MIN_REPEAT_INTERVAL = 1
MAX_REPEAT_INTERVAL = 7


# ─── Enums ───────────────────────────────────────────────────────

class BlockType(str, Enum):
    """Content block tags. All tags are encrypted identically."""
    TEXT = "text"
    CODE = "code"
    PAGE = "page"
    BIRTHDAY = "birthday"
    BLOCK = "block"
