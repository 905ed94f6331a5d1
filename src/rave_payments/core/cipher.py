"""
Card payload encryption.

Rave expects card details to travel inside the ``client`` field of a charge
request, encrypted with TripleDES (ECB, PKCS#7 padding) under a 24 byte key
derived from the merchant secret key, and base64 encoded. The API sends the
algorithm name back as ``alg: "3DES-24"``.

ECB without an IV is deterministic: the same plaintext and key always give the
same ciphertext. The remote service depends on this, so it is kept.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
from typing import Any, Mapping

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, modes

from .errors import EncryptionError

__all__ = [
    "ALGORITHM",
    "CardCipher",
    "derive_key",
]

ALGORITHM = "3DES-24"
SECRET_KEY_PREFIX = b"FLWSECK-"

_BLOCK_SIZE_BITS = 64
_HALF_KEY_LENGTH = 12


def derive_key(secret_key: str) -> bytes:
    """
    Derive the 24 byte TripleDES key from a Rave secret key.

    The key is the first 12 characters of the secret (with its ``FLWSECK-``
    marker removed) followed by the last 12 hex digits of the secret's MD5.
    """
    if not secret_key:
        raise EncryptionError("A secret key is required to derive the card key")

    raw = secret_key.encode("utf-8")
    digest_tail = hashlib.md5(raw).hexdigest()[-_HALF_KEY_LENGTH:].encode("ascii")
    head = raw.replace(SECRET_KEY_PREFIX, b"", 1)[:_HALF_KEY_LENGTH]
    if len(head) != _HALF_KEY_LENGTH:
        raise EncryptionError(
            f"Secret key is too short to derive a card key "
            f"(need at least {_HALF_KEY_LENGTH} characters after the prefix)"
        )
    return head + digest_tail


class CardCipher:
    """
    Encrypts card payloads with a key derived from ``secret_key``.

    The key is derived once, on construction, so a missing or malformed
    secret surfaces before any request is assembled.
    """

    algorithm = ALGORITHM

    def __init__(self, secret_key: str) -> None:
        self._key = derive_key(secret_key)

    def _cipher(self) -> Cipher:
        return Cipher(TripleDES(self._key), modes.ECB())

    def encrypt(self, plaintext: str) -> str:
        """Return the base64 encoded ciphertext of ``plaintext``."""
        padder = padding.PKCS7(_BLOCK_SIZE_BITS).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        try:
            encryptor = self._cipher().encryptor()
            ciphertext = encryptor.update(padded) + encryptor.finalize()
        except ValueError as exc:
            raise EncryptionError(f"Card payload encryption failed: {exc}") from exc
        return base64.b64encode(ciphertext).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        """Reverse :meth:`encrypt`."""
        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise EncryptionError("Ciphertext is not valid base64") from exc

        try:
            decryptor = self._cipher().decryptor()
            padded = decryptor.update(raw) + decryptor.finalize()
            unpadder = padding.PKCS7(_BLOCK_SIZE_BITS).unpadder()
            plaintext = unpadder.update(padded) + unpadder.finalize()
        except ValueError as exc:
            raise EncryptionError(f"Card payload decryption failed: {exc}") from exc

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncryptionError("Decrypted payload is not valid UTF-8") from exc

    def encrypt_payload(self, payload: Mapping[str, Any]) -> str:
        """Serialize ``payload`` as compact JSON and encrypt it."""
        try:
            serialized = json.dumps(dict(payload), separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise EncryptionError(f"Card payload is not JSON serializable: {exc}") from exc
        return self.encrypt(serialized)
