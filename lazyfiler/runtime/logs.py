"""Logging setup: a file under the config directory, or nothing at all.

The terminal belongs to the UI, so log records never go to stderr.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path

DEBUG_ENV_VAR = "LAZYFILER_DEBUG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def logging_requested(flag: bool) -> bool:
    return flag or bool(os.environ.get(DEBUG_ENV_VAR))


def configure_logging(enabled: bool, log_dir: Path) -> Path | None:
    """Install the package log handler and return the log file path, if any."""
    package_logger = logging.getLogger("lazyfiler")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if not enabled:
        package_logger.addHandler(logging.NullHandler())
        package_logger.propagate = False
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / time.strftime("lazyfiler-%Y%m%d-%H%M%S.log")
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False
    package_logger.info("Logging to %s", log_path)
    return log_path


__all__ = ["DEBUG_ENV_VAR", "logging_requested", "configure_logging"]
