"""
Process-wide logging setup. Call configure_logging() once at startup.
"""

from __future__ import annotations

import logging
import sys

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, (level or config.log_level()).upper(), logging.INFO))

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
