"""Process-level logging configuration."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the running process.

    Unknown level names fall back to ``INFO``.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=_LOG_FORMAT)
    # httpx / openai log every request at INFO.
    logging.getLogger("httpx").setLevel(max(numeric, logging.WARNING))
