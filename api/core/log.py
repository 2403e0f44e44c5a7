"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def setup_logging() -> None:
    # basicConfig is a no-op when the root logger already has handlers (uvicorn, pytest).
    logging.basicConfig(level=getattr(logging, log_level(), logging.INFO), format=LOG_FORMAT)
