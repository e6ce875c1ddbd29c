"""
logging_config.py — Centralized Logging Configuration

Configures one logging setup for the API server and the CLI:

    • Console output (stdout), container friendly
    • Optional file output when ``STOREFRONT_LOG_FILE`` is set
    • Process ID tagging for multi-worker visibility
    • Reduced verbosity for third-party libraries
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from storefront.infrastructure.config import Settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - [PID:%(process)d] - %(name)s - %(message)s"


def setup_logging(settings: Settings, stream: TextIO | None = None) -> None:
    """Configure the root logger from *settings*. Safe to call more than once.

    The CLI passes ``sys.stderr`` as *stream* so log lines stay out of its output.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    for noisy in ("pymongo", "httpx", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
