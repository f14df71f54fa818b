"""passcrypt: passphrase-based authenticated encryption of byte payloads.

    salt = passcrypt.random_salt(16)
    blob = passcrypt.encrypt(b"attack at dawn", "correct horse", salt)
    passcrypt.decrypt(blob, "correct horse", salt)  # b"attack at dawn"

Store the salt next to the blob; both are needed to decrypt.
"""

from .core.exceptions import (
    PassCryptError,
    EntropyError,
    CipherConstructionError,
    AuthenticationError,
    InvalidParametersError,
)
from .logging_config import configure_logging
from .security import (
    KDFParams,
    PassphraseCipher,
    derive_key,
    random_salt,
    encrypt,
    decrypt,
)

__version__ = "0.1.0"

__all__ = [
    "PassCryptError",
    "EntropyError",
    "CipherConstructionError",
    "AuthenticationError",
    "InvalidParametersError",
    "configure_logging",
    "KDFParams",
    "PassphraseCipher",
    "derive_key",
    "random_salt",
    "encrypt",
    "decrypt",
]
