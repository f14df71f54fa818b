"""Security primitives for passcrypt.

- PBKDF2 / Argon2id passphrase key derivation with injectable parameters
- Secure random salts and nonces
- AES-256-GCM encryption of single byte payloads (``nonce || ciphertext || tag``)
"""

from .entropy import DEFAULT_SALT_LEN, read_random
from .kdf import KDFParams, derive_key, kdf_params_to_dict, kdf_params_from_dict
from .crypto import (
    NONCE_SIZE,
    TAG_SIZE,
    PassphraseCipher,
    get_default_cipher,
    random_salt,
    encrypt,
    decrypt,
)

__all__ = [
    "DEFAULT_SALT_LEN",
    "read_random",
    "KDFParams",
    "derive_key",
    "kdf_params_to_dict",
    "kdf_params_from_dict",
    "NONCE_SIZE",
    "TAG_SIZE",
    "PassphraseCipher",
    "get_default_cipher",
    "random_salt",
    "encrypt",
    "decrypt",
]
