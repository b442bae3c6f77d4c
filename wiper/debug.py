"""Logging setup for the TUI session.

Log records never go to the terminal: while raw mode is active any write to
stderr would corrupt the frame. Output goes to a file when one is requested
(``--log-file``, ``WIPER_LOG``, or ``WIPER_DEBUG`` for the default location),
otherwise to a ``NullHandler``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "wiper"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / "wiper.log"

_CONFIGURED = False


def _debug_enabled() -> bool:
    level_env = os.environ.get("WIPER_DEBUG", "0").lower()
    return level_env in {"1", "true", "yes", "on", "debug"}


def _resolve_log_path(log_file: str | Path | None, debug_enabled: bool) -> Path | None:
    if log_file:
        return Path(log_file).expanduser()
    env_path = os.environ.get("WIPER_LOG")
    if env_path:
        return Path(env_path).expanduser()
    if debug_enabled:
        return DEFAULT_LOG_PATH
    return None


def configure_logging(log_file: str | Path | None = None) -> logging.Logger:
    """Install the package log handler once and return the package logger."""
    global _CONFIGURED
    logger = logging.getLogger(APP_NAME)
    if _CONFIGURED:
        return logger

    debug_enabled = _debug_enabled() or bool(log_file)
    logger.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
    logger.propagate = False

    log_path = _resolve_log_path(log_file, debug_enabled)
    handler: logging.Handler
    if log_path is None:
        handler = logging.NullHandler()
    else:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            # No terminal fallback here; raw mode owns the screen.
            handler = logging.NullHandler()
        else:
            handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    _CONFIGURED = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger (``wiper.<name>``)."""
    return logging.getLogger(APP_NAME).getChild(name)


__all__ = ["configure_logging", "get_logger", "DEFAULT_LOG_PATH"]
