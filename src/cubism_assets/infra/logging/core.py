from __future__ import annotations

"""
Logging Setup for the Asset Hooks.

The hooks run inside an editor process that usually has its own handlers on
the root logger, so this module only ever adds, replaces or removes the
handlers it tagged itself. Records from the dispatcher, the bootstrapper
and the project patcher go through a QueueHandler; the console and the
optional rotating log file are written from the listener thread, keeping
disk I/O out of the editor callbacks.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, Optional

from cubism_assets.infra.fs import get_user_data_dir
from cubism_assets.infra.logging.config import _LEVEL_MAP, LoggingConfig

_CONFIGURED_FLAG_ATTR: str = "_cubism_assets_configured"
_QUEUE_LISTENER_ATTR: str = "_cubism_assets_queue_listener"
_HANDLER_TAG_ATTR: str = "_cubism_assets_handler"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "cubism_assets.log") -> str:
    """Path of the log file used by 'cubism-assets --log-file' without a value."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach the hook handlers to the root logger.

    A second call is a no-op unless 'force' is set, in which case the
    previous queue listener is stopped and our handlers are rebuilt with the
    new settings (the CLI does this once the effective config is known).
    An unusable log file path degrades to console-only output.

    Args:
        cfg: Level, console flag and optional log file.
        force: Rebuild the handlers even if logging is already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = _LEVEL_MAP.get((cfg.level or "").strip().upper(), logging.INFO)
    root.setLevel(level_int)

    _stop_existing_listener(root)
    _remove_our_handlers(root)

    handlers_list: List[logging.Handler] = []

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level_int)
        sh.setFormatter(logging.Formatter(cfg.console_fmt))
        handlers_list.append(sh)

    if cfg.log_file:
        fh = _open_log_file(cfg, level_int)
        if fh:
            handlers_list.append(fh)

    if not handlers_list:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
    listener.start()
    root.addHandler(queue_handler)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    atexit.register(_safe_stop_listener, listener)

    return root


def shutdown_logging() -> None:
    """Flush the queue listener and detach every handler we own."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _remove_our_handlers(root: logging.Logger) -> None:
    """Detach the handlers we tagged, leaving the host's own handlers alone."""
    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG_ATTR, False):
            root.removeHandler(h)
            h.close()


def _open_log_file(cfg: LoggingConfig, level_int: int) -> Optional[RotatingFileHandler]:
    """Create the rotating file handler, or None if the path cannot be opened."""
    try:
        parent = os.path.dirname(os.path.abspath(cfg.log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            cfg.log_file,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: cannot open log file '{cfg.log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return fh


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating listeners that were already stopped.

    QueueListener.stop() fails when its thread has already been joined,
    which happens when atexit runs after an explicit shutdown.
    """
    if not listener:
        return

    if getattr(listener, "_thread", None) is not None:
        listener.stop()
