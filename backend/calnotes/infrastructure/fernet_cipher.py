"""Fernet Cipher — default Cipher adapter backed by cryptography's Fernet.

Invariants:
    - Any configured key string is accepted; a valid Fernet key is derived via SHA-256
    - encrypt/decrypt are inverse for ciphertext produced with the same key
    - InvalidToken and encoding errors are mapped to CipherError

Design Decisions:
    - Key derivation from an arbitrary secret string so operators can set any
      NOTE_ENCRYPTION_KEY without generating a Fernet key by hand
"""

import base64
import hashlib
import logging

from cryptography.fernet import Fernet, InvalidToken

from calnotes.core.errors import CipherError

logger = logging.getLogger(__name__)


def derive_fernet_key(secret: str) -> bytes:
    """Derive a base64-encoded 32-byte Fernet key from any string."""
    key_bytes = hashlib.sha256(secret.encode()).digest()
    return base64.urlsafe_b64encode(key_bytes)


class FernetCipher:
    """Encrypts note text as url-safe base64 Fernet tokens."""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Encryption secret must not be empty")
        self._fernet = Fernet(derive_fernet_key(secret))

    def encrypt(self, plaintext: str) -> str:
        try:
            return self._fernet.encrypt(plaintext.encode()).decode()
        except (TypeError, UnicodeError) as e:
            logger.error(f"Failed to encrypt note field: {type(e).__name__}")
            raise CipherError("encrypt")

    def decrypt(self, ciphertext: str) -> str:
        try:
            return self._fernet.decrypt(ciphertext.encode()).decode()
        except (InvalidToken, TypeError, UnicodeError) as e:
            logger.error(f"Failed to decrypt note field: {type(e).__name__}")
            raise CipherError("decrypt")
