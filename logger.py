"""
logger.py

Responsibility: Configures Python's standard logging for the process using the
"[timestamp] [LEVEL] name: message" line format.
Does NOT: decide what gets logged; modules use logging.getLogger(__name__).
configure_logging() is called once by the embedding application at startup,
usually with Settings.log_level and Settings.log_file. Library code never
calls it.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so repeated calls replace rather than stack them
_HANDLER_ATTR = "_ddns_publicip_handler"


def configure_logging(level: str | int = "INFO", log_file: str | None = None) -> logging.Logger:
    """
    Installs a stdout handler (and optionally a file handler) on the root logger.

    Safe to call more than once: handlers added by a previous call are removed
    first, handlers installed by anyone else are left alone.

    Args:
        level: Level name or number applied to the root logger.
        log_file: Optional path that also receives every log line. Its
                  directory is created when missing.

    Returns:
        The configured root logger.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_ATTR, True)
        root.addHandler(handler)

    root.setLevel(level.upper() if isinstance(level, str) else level)

    # httpx logs every request at INFO, including full URLs with credentials
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return root
