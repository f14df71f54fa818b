"""Lightweight logging setup for applications embedding passcrypt."""

import logging
import sys
from typing import Optional, TextIO


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    # Root handler is only installed once by basicConfig; the package level is always applied.
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=stream or sys.stdout,
    )
    logging.getLogger("passcrypt").setLevel(level)
