"""Note Crypto — tests for field-level sealing of notes.

Tests cover:
    - Empty-string sentinel for title/subject
    - Block payload round-trip for nested JSON values
    - Block order and type tags preserved, type never encrypted
    - Corrupted ciphertext surfaces as CorruptedNoteError
"""

import json

import pytest

from calnotes.core.domain_types import BlockType
from calnotes.core.errors import CorruptedNoteError
from calnotes.core.note_crypto import open_blocks, open_text, seal_blocks, seal_text


def test_empty_title_is_stored_as_empty_string(cipher):
    assert seal_text(cipher, "") == ""
    assert seal_text(cipher, None) == ""
    assert cipher.encrypt_calls == 0


def test_non_empty_title_is_ciphertext(cipher):
    sealed = seal_text(cipher, "Dentist")
    assert sealed != "Dentist"
    assert open_text(cipher, sealed) == "Dentist"


def test_open_text_keeps_empty_sentinel(cipher):
    assert open_text(cipher, "") == ""


@pytest.mark.parametrize("payload", [
    "plain text",
    "",
    None,
    42,
    ["a", {"b": [1, 2, None]}],
    {"lang": "python", "code": "print('hi')\n", "lines": [1, 2], "ok": True},
    {"unicode": "ghi chú — lịch"},
])
def test_block_payload_round_trip(cipher, payload):
    sealed = seal_blocks(cipher, [{"type": "code", "data": payload}])
    assert sealed[0]["data"] == cipher.encrypt(json.dumps(payload, ensure_ascii=False))
    assert open_blocks(cipher, sealed) == [{"type": "code", "data": payload}]


def test_block_order_and_types_preserved(cipher):
    blocks = [
        {"type": "text", "data": "first"},
        {"type": "birthday", "data": {"name": "Ana"}},
        {"type": "page", "data": "third"},
    ]
    sealed = seal_blocks(cipher, blocks)
    assert [b["type"] for b in sealed] == ["text", "birthday", "page"]
    assert open_blocks(cipher, sealed) == blocks


def test_enum_block_types_stored_as_values(cipher):
    class _Block:
        type = BlockType.CODE
        data = "x = 1"

    sealed = seal_blocks(cipher, [_Block()])
    assert sealed[0]["type"] == "code"


def test_corrupted_block_raises_corrupted_note(cipher):
    with pytest.raises(CorruptedNoteError) as exc:
        open_blocks(cipher, [{"type": "text", "data": "garbage"}])
    assert exc.value.field == "content_blocks[0]"
    assert exc.value.http_status == 500


def test_unparseable_block_payload_raises_corrupted_note(cipher):
    with pytest.raises(CorruptedNoteError):
        open_blocks(cipher, [{"type": "text", "data": cipher.encrypt("{not json")}])


def test_corrupted_title_raises_corrupted_note(cipher):
    with pytest.raises(CorruptedNoteError) as exc:
        open_text(cipher, "garbage", "title")
    assert exc.value.field == "title"


@pytest.mark.parametrize("block", [
    {"type": "text", "data": None},
    {"type": "text", "data": 7},
    {"type": "text"},
    "not-a-block",
])
def test_block_without_string_ciphertext_raises_corrupted_note(cipher, block):
    with pytest.raises(CorruptedNoteError) as exc:
        open_blocks(cipher, [block])
    assert exc.value.field == "content_blocks[0]"
