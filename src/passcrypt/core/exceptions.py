"""
Exceptions for passcrypt
Everything raised on purpose derives from PassCryptError so callers have one thing to catch
"""


class PassCryptError(Exception):
    # general container for errors
    pass


class EntropyError(PassCryptError):
    # raised when the secure random source is unavailable or returns short reads
    pass


class CipherConstructionError(PassCryptError):
    # raised when AES-GCM cannot be built from the derived key
    pass


class AuthenticationError(PassCryptError):
    # raised on tag mismatch or a blob too short to hold a nonce
    # the message never says which one happened
    pass


class InvalidParametersError(PassCryptError, ValueError):
    # raised when KDF parameters are rejected at construction time
    pass
