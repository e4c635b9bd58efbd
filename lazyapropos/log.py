"""Package logging helpers.

Every module logs through a child of the ``lazyapropos`` logger so one console
handler installed by the CLI covers the whole pipeline.
"""

from __future__ import annotations

import logging

import colorlog

_PROJ_NAME = "lazyapropos"
LOG_FORMAT = "%(log_color)s%(levelname)-8s%(reset)s %(name)s: %(message)s"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package log or a sub-log for ``name`` if provided.

    Module names that already carry the package prefix are used as-is.
    """
    if not name or name == _PROJ_NAME:
        return logging.getLogger(_PROJ_NAME)
    if name.startswith(f"{_PROJ_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_PROJ_NAME}.{name}")


def get_console_log(level: str | int | None = None, name: str | None = None) -> logging.Logger:
    """Get the package logger and enable a colored handler writing to stderr.

    Repeated calls only adjust the level; the handler is attached once.
    """
    log = get_logger(name)
    root = get_logger()
    if not any(getattr(handler, "_lazyapropos_console", False) for handler in root.handlers):
        handler = colorlog.StreamHandler()
        handler.setFormatter(colorlog.ColoredFormatter(LOG_FORMAT, log_colors=LOG_COLORS))
        handler._lazyapropos_console = True
        root.addHandler(handler)
    if level is not None:
        root.setLevel(level.upper() if isinstance(level, str) else level)
    return log


__all__ = ["get_console_log", "get_logger"]
