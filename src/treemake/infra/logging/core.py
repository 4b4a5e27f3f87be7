from __future__ import annotations

"""
Logging Lifecycle.

configure_logging installs one tagged QueueHandler on the root logger and
starts a QueueListener that drains the queue into the output handlers, so
generation code never blocks on log I/O. Configuration happens once per
process until shutdown_logging is called or force is requested.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from treemake.infra.logging.config import LoggingConfig
from treemake.infra.logging.handlers import _is_our_handler, _tag_handler, build_output_handlers

_CONFIGURED_FLAG_ATTR: str = "_treemake_configured"
_QUEUE_LISTENER_ATTR: str = "_treemake_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route the root logger through a queue to the configured outputs.

    Args:
        cfg: Logging settings.
        force: Replace an earlier configuration instead of keeping it.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    shutdown_logging()
    root.setLevel(cfg.level_number())

    outputs = build_output_handlers(cfg)
    if not outputs:
        return root

    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(records)
    _tag_handler(queue_handler)

    listener = QueueListener(records, *outputs, respect_handler_level=True)
    listener.start()
    root.addHandler(queue_handler)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    atexit.register(_stop_listener, listener)

    return root


def shutdown_logging() -> None:
    """Drain pending records, stop the listener and detach our handlers."""
    root = logging.getLogger()

    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in [h for h in root.handlers if _is_our_handler(h)]:
        root.removeHandler(handler)
        handler.close()

    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener and close its outputs; a stopped listener is skipped."""
    # QueueListener.stop() is not safe to call twice
    if listener is None or getattr(listener, "_thread", None) is None:
        return
    listener.stop()
    for handler in listener.handlers:
        handler.close()
