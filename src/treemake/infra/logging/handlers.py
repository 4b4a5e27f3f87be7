from __future__ import annotations

"""
Handler Construction.

Builds the stderr and rotating-file handlers fed by the queue listener.
Every handler created here is tagged, so that reconfiguration and shutdown
only ever detach handlers this package installed.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from treemake.infra.logging.config import CONSOLE_FORMAT, DATE_FORMAT, FILE_FORMAT, LoggingConfig

_HANDLER_TAG_ATTR: str = "_treemake_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def build_output_handlers(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the output handlers requested by the settings.

    Args:
        cfg: Logging settings.

    Returns:
        List[logging.Handler]: Tagged handlers at the configured level; empty
        if neither console nor file output is wanted.
    """
    handlers: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(console)

    if cfg.log_file:
        log_file = _open_log_file(cfg)
        if log_file is not None:
            handlers.append(log_file)

    level = cfg.level_number()
    for handler in handlers:
        handler.setLevel(level)
        _tag_handler(handler)
    return handlers


def _open_log_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """Open the rotating log file, creating its folder; None on I/O failure."""
    path = os.path.abspath(cfg.log_file or "")
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{path}': {e}\n")
        return None

    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler
