"""Passphrase key derivation.

The defaults (PBKDF2-HMAC-SHA1, 4096 iterations, 32-byte key) are the parameters
existing blobs were produced with and are kept so those blobs stay readable.
:meth:`KDFParams.recommended` gives a stronger Argon2id profile for new data.
Blobs do not record which parameters produced them, so switching parameters for
data that is already encrypted makes it undecryptable.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from passcrypt.core.exceptions import InvalidParametersError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "pbkdf2-sha1"
DEFAULT_ITERATIONS = 4096
DEFAULT_KEY_LEN = 32
DEFAULT_MEMORY_COST = 65536  # KiB, argon2id only
DEFAULT_PARALLELISM = 1  # argon2id only
MIN_KEY_LEN = 16
MAX_KEY_LEN = 1024
ARGON2_MIN_SALT_LEN = 8

# argon2 takes uint32 costs and at most 2**24 - 1 lanes
_UPPER_BOUNDS = {
    "iterations": 2**32 - 1,
    "key_len": MAX_KEY_LEN,
    "memory_cost": 2**32 - 1,
    "parallelism": 2**24 - 1,
}

_PBKDF2_HASHES = {
    "pbkdf2-sha1": hashes.SHA1,
    "pbkdf2-sha256": hashes.SHA256,
    "pbkdf2-sha512": hashes.SHA512,
}
ALGORITHMS = tuple(_PBKDF2_HASHES) + ("argon2id",)


@dataclass(frozen=True)
class KDFParams:
    """
    Key derivation parameters, injected into :class:`PassphraseCipher`.

    ``iterations`` is the PBKDF2 round count, or the Argon2 time cost when
    ``algorithm`` is ``"argon2id"``. ``memory_cost`` (KiB) and ``parallelism``
    only apply to Argon2id.
    """

    algorithm: str = DEFAULT_ALGORITHM
    iterations: int = DEFAULT_ITERATIONS
    key_len: int = DEFAULT_KEY_LEN
    memory_cost: int = DEFAULT_MEMORY_COST
    parallelism: int = DEFAULT_PARALLELISM

    def __post_init__(self) -> None:
        if self.algorithm not in ALGORITHMS:
            raise InvalidParametersError(
                f"Unsupported KDF algorithm {self.algorithm!r}; expected one of {', '.join(ALGORITHMS)}"
            )
        for name in ("iterations", "key_len", "memory_cost", "parallelism"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidParametersError(f"{name} must be a positive integer, got {value!r}")
            if value > _UPPER_BOUNDS[name]:
                raise InvalidParametersError(f"{name} must be at most {_UPPER_BOUNDS[name]}, got {value!r}")
        if self.key_len < MIN_KEY_LEN:
            raise InvalidParametersError(f"key_len must be at least {MIN_KEY_LEN} bytes")
        if self.algorithm == "argon2id" and self.memory_cost < 8 * self.parallelism:
            raise InvalidParametersError("memory_cost must be at least 8 * parallelism KiB for argon2id")

    @classmethod
    def recommended(cls) -> "KDFParams":
        """Argon2id profile for new data. Not compatible with the defaults."""
        return cls(algorithm="argon2id", iterations=3, memory_cost=65536, parallelism=1)


def derive_key(
    passphrase: Union[str, bytes],
    salt: bytes,
    params: Optional[KDFParams] = None,
) -> bytes:
    """
    Derive a symmetric key from ``passphrase`` and ``salt``.

    Deterministic for a given (passphrase, salt, params). ``str`` passphrases
    are UTF-8 encoded first, so ``"pw"`` and ``b"pw"`` give the same key.
    Returns ``params.key_len`` raw bytes.
    """
    params = params or KDFParams()
    if isinstance(passphrase, str):
        passphrase = passphrase.encode("utf-8")

    logger.debug(
        "deriving %d-byte key with %s (iterations=%d)",
        params.key_len,
        params.algorithm,
        params.iterations,
    )

    if params.algorithm == "argon2id":
        if len(salt) < ARGON2_MIN_SALT_LEN:
            raise InvalidParametersError(f"argon2id needs a salt of at least {ARGON2_MIN_SALT_LEN} bytes")
        try:
            return hash_secret_raw(
                secret=passphrase,
                salt=salt,
                time_cost=params.iterations,
                memory_cost=params.memory_cost,
                parallelism=params.parallelism,
                hash_len=params.key_len,
                type=Type.ID,
            )
        except HashingError as exc:
            raise InvalidParametersError(f"argon2id derivation failed: {exc}") from exc

    kdf = PBKDF2HMAC(
        algorithm=_PBKDF2_HASHES[params.algorithm](),
        length=params.key_len,
        salt=salt,
        iterations=params.iterations,
    )
    return kdf.derive(passphrase)


def kdf_params_to_dict(params: KDFParams) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "algo": params.algorithm,
        "iterations": params.iterations,
        "key_len": params.key_len,
    }
    if params.algorithm == "argon2id":
        out["memory"] = params.memory_cost
        out["parallelism"] = params.parallelism
    return out


def kdf_params_from_dict(data: Mapping[str, Any]) -> KDFParams:
    # Missing keys fall back to the legacy defaults; values are type-checked by KDFParams, not coerced.
    if not isinstance(data, Mapping):
        raise InvalidParametersError(f"Malformed KDF parameters: expected a mapping, got {type(data).__name__}")

    return KDFParams(
        algorithm=data.get("algo", DEFAULT_ALGORITHM),
        iterations=data.get("iterations", DEFAULT_ITERATIONS),
        key_len=data.get("key_len", DEFAULT_KEY_LEN),
        memory_cost=data.get("memory", DEFAULT_MEMORY_COST),
        parallelism=data.get("parallelism", DEFAULT_PARALLELISM),
    )
