"""Logging utilities for the archiver."""

from __future__ import annotations

import logging
import os
import sys
import threading

_LOG_LOCK = threading.Lock()

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def setup_logging() -> None:
    """Configure the root logger for line-oriented output on stdout."""
    root = logging.getLogger()
    if getattr(root, "_os_archiver_logging_configured", False):
        return
    with _LOG_LOCK:
        if getattr(root, "_os_archiver_logging_configured", False):
            return

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

        root.handlers.clear()
        root.addHandler(handler)
        level = os.getenv("LOG_LEVEL", "INFO").upper()
        root.setLevel(getattr(logging, level, logging.INFO))

        # The client logs every request at INFO.
        for name in ("urllib3", "opensearchpy", "opensearch"):
            logging.getLogger(name).setLevel(logging.WARNING)

        root._os_archiver_logging_configured = True
