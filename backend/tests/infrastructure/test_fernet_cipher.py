"""Fernet Cipher — tests for the default Cipher adapter."""

import pytest
from cryptography.fernet import Fernet

from calnotes.core.errors import CipherError
from calnotes.infrastructure.fernet_cipher import FernetCipher, derive_fernet_key


def test_derived_key_is_valid_fernet_key():
    Fernet(derive_fernet_key("any string at all"))


def test_round_trip():
    cipher = FernetCipher("secret")
    token = cipher.encrypt("Meeting with Ana")
    assert token != "Meeting with Ana"
    assert cipher.decrypt(token) == "Meeting with Ana"


def test_ciphertext_differs_per_call():
    cipher = FernetCipher("secret")
    assert cipher.encrypt("same") != cipher.encrypt("same")


def test_wrong_key_raises_cipher_error():
    token = FernetCipher("secret").encrypt("hello")
    with pytest.raises(CipherError) as exc:
        FernetCipher("other").decrypt(token)
    assert exc.value.operation == "decrypt"


def test_garbage_raises_cipher_error():
    with pytest.raises(CipherError):
        FernetCipher("secret").decrypt("not-a-token")


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        FernetCipher("")
