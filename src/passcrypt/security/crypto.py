"""Passphrase-based AES-GCM encryption of opaque byte payloads.

Blob layout:
- 12 bytes: random nonce
- N bytes: ciphertext (same length as the plaintext)
- 16 bytes: GCM authentication tag

There is no header. The salt and the KDF parameters are not part of the blob;
the caller keeps the salt next to it and decrypts with the same parameters.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from passcrypt.core.exceptions import AuthenticationError, CipherConstructionError
from .entropy import DEFAULT_SALT_LEN, RandomSource, read_random
from .kdf import KDFParams, derive_key

logger = logging.getLogger(__name__)

NONCE_SIZE = 12
TAG_SIZE = 16

# Same message for every decrypt failure so callers cannot tell causes apart.
_AUTH_FAILED = "Decryption failed: wrong passphrase or salt, or corrupted data"


class PassphraseCipher:
    """
    Encrypts and decrypts byte payloads under a passphrase and a per-item salt.

    Each call derives its own key and, for encryption, draws its own nonce, so
    one instance can be shared between threads. Configuration is fixed at
    construction:

    - ``params``: :class:`KDFParams`, defaults to the legacy-compatible
      PBKDF2-HMAC-SHA1 / 4096 rounds / 32-byte key
    - ``random_bytes``: callable returning N secure random bytes, used for
      salts and nonces (``os.urandom`` by default)
    """

    def __init__(self, params: Optional[KDFParams] = None, random_bytes: RandomSource = os.urandom):
        self.params = params if params is not None else KDFParams()
        self._random_bytes = random_bytes

    @property
    def nonce_size(self) -> int:
        return NONCE_SIZE

    @property
    def tag_size(self) -> int:
        return TAG_SIZE

    @property
    def overhead(self) -> int:
        """Bytes a blob carries on top of its plaintext."""
        return NONCE_SIZE + TAG_SIZE

    def derive_key(self, passphrase: Union[str, bytes], salt: bytes) -> bytes:
        return derive_key(passphrase, salt, self.params)

    def random_salt(self, size: int = DEFAULT_SALT_LEN) -> bytes:
        return read_random(size, self._random_bytes)

    def _build_aead(self, key: bytes) -> AESGCM:
        try:
            return AESGCM(key)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            logger.debug("AES-GCM construction failed: %s", exc)
            raise CipherConstructionError(f"Cannot build AES-GCM from a {len(key)}-byte key") from exc

    def encrypt(self, data: bytes, passphrase: Union[str, bytes], salt: bytes) -> bytes:
        """
        Encrypt ``data`` and return ``nonce || ciphertext || tag``.

        A fresh nonce is drawn on every call, so encrypting the same input
        twice gives two different blobs.

        Raises ``CipherConstructionError`` if the derived key is not usable by
        AES and ``EntropyError`` if no nonce can be drawn.
        """
        aead = self._build_aead(self.derive_key(passphrase, salt))
        nonce = read_random(NONCE_SIZE, self._random_bytes)
        sealed = aead.encrypt(nonce, data, None)
        logger.debug("encrypted %d bytes into a %d-byte blob", len(data), NONCE_SIZE + len(sealed))
        return nonce + sealed

    def decrypt(self, blob: bytes, passphrase: Union[str, bytes], salt: bytes) -> bytes:
        """
        Decrypt a blob produced by :meth:`encrypt` with the same passphrase and salt.

        Wrong passphrase, wrong salt, tampering and truncation all raise the
        same ``AuthenticationError``. Blobs shorter than a nonce are rejected
        before any key derivation.
        """
        if len(blob) < NONCE_SIZE:
            logger.debug("rejecting %d-byte blob: shorter than the nonce", len(blob))
            raise AuthenticationError(_AUTH_FAILED)

        aead = self._build_aead(self.derive_key(passphrase, salt))
        nonce, sealed = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
        try:
            return aead.decrypt(nonce, sealed, None)
        except InvalidTag:
            logger.debug("authentication failed for %d-byte blob", len(blob))
            raise AuthenticationError(_AUTH_FAILED) from None


# module-level default cipher with the legacy-compatible parameters
_default_cipher = PassphraseCipher()


def get_default_cipher() -> PassphraseCipher:
    return _default_cipher


def random_salt(size: int = DEFAULT_SALT_LEN) -> bytes:
    return get_default_cipher().random_salt(size)


def encrypt(data: bytes, passphrase: Union[str, bytes], salt: bytes) -> bytes:
    return get_default_cipher().encrypt(data, passphrase, salt)


def decrypt(blob: bytes, passphrase: Union[str, bytes], salt: bytes) -> bytes:
    return get_default_cipher().decrypt(blob, passphrase, salt)
