"""Access to the secure random source.

Everything in passcrypt that needs randomness (salts and nonces) goes through
:func:`read_random` so a failing or short source surfaces as ``EntropyError``.
"""
import logging
import os
from typing import Callable, Optional

from passcrypt.core.exceptions import EntropyError

logger = logging.getLogger(__name__)

DEFAULT_SALT_LEN = 16

RandomSource = Callable[[int], bytes]


def read_random(size: int, source: Optional[RandomSource] = None) -> bytes:
    """Return exactly ``size`` bytes from ``source`` (``os.urandom`` by default)."""
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise ValueError(f"size must be a non-negative integer, got {size!r}")

    source = source or os.urandom
    try:
        data = source(size)
    except (OSError, NotImplementedError) as exc:
        logger.debug("random source failed for %d bytes: %s", size, exc)
        raise EntropyError("secure random source unavailable") from exc

    if len(data) != size:
        logger.debug("random source returned %d of %d bytes", len(data), size)
        raise EntropyError(f"secure random source returned {len(data)} of {size} bytes")
    return bytes(data)
