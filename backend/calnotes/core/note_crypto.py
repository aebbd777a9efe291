"""Note Crypto — applies the cipher to every encrypted field of a note.

Invariants:
    - Empty title/subject is stored as "" (never the ciphertext of "")
    - Block `type` is never encrypted; block `data` is ciphertext of json.dumps(data)
    - Block order is preserved in both directions
    - Decrypt/parse failures surface as CorruptedNoteError, never raw exceptions

Design Decisions:
    - Cipher passed in, not imported: the algorithm is a capability of the shell
    - JSON as the serialized form: any JSON value round-trips to an equal value
"""

import json
import logging
from typing import Any, Iterable

from calnotes.core.errors import CipherError, CorruptedNoteError
from calnotes.core.repository_protocols import Cipher

logger = logging.getLogger(__name__)


def seal_text(cipher: Cipher, value: str | None) -> str:
    """Encrypt title/subject text, keeping the empty-string sentinel."""
    if not value:
        return ""
    return cipher.encrypt(value)


def open_text(cipher: Cipher, value: str | None, field: str = "text") -> str:
    """Decrypt title/subject text stored by seal_text."""
    if not value:
        return ""
    try:
        return cipher.decrypt(value)
    except (CipherError, ValueError) as e:
        logger.error(f"Failed to decrypt note {field}: {type(e).__name__}")
        raise CorruptedNoteError(field)


def seal_blocks(cipher: Cipher, blocks: Iterable[Any]) -> list[dict]:
    """Encrypt block payloads. Accepts dicts or objects with type/data."""
    sealed = []
    for block in blocks:
        block_type, data = _unpack_block(block)
        sealed.append({
            "type": block_type,
            "data": cipher.encrypt(json.dumps(data, ensure_ascii=False)),
        })
    return sealed


def open_blocks(cipher: Cipher, stored: Iterable[dict]) -> list[dict]:
    """Decrypt and parse stored blocks back into their structured form."""
    opened = []
    for index, block in enumerate(stored):
        field = f"content_blocks[{index}]"
        ciphertext = block.get("data") if isinstance(block, dict) else None
        if not isinstance(ciphertext, str):
            logger.error(f"Failed to restore note {field}: missing ciphertext")
            raise CorruptedNoteError(field)
        try:
            data = json.loads(cipher.decrypt(ciphertext))
        except (CipherError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to restore note {field}: {type(e).__name__}")
            raise CorruptedNoteError(field)
        opened.append({"type": block.get("type"), "data": data})
    return opened


def _unpack_block(block: Any) -> tuple[str, Any]:
    if isinstance(block, dict):
        block_type, data = block.get("type"), block.get("data")
    else:
        block_type, data = block.type, block.data
    # str Enum members serialize as their value
    return getattr(block_type, "value", block_type), data
