# tagorder/core/log.py
"""
Logger plumbing. The core never installs handlers; callers inject a logger
(or get the module logger) and only the CLI entrypoint configures output.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from tagorder.core.config import LOG_LEVEL, SUCCESS_LEVEL


class TagLogger(logging.LoggerAdapter):
    """LoggerAdapter with a success() level on top of debug/info/warning/error."""

    def process(self, msg, kwargs):
        prefix = (self.extra or {}).get("prefix")
        if prefix:
            msg = f"[{prefix}] {msg}"
        return msg, kwargs

    def success(self, msg, *args, **kwargs) -> None:
        try:
            self.log(SUCCESS_LEVEL, msg, *args, **kwargs)
        except Exception:
            pass


def get_logger(
    name: str,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    prefix: str | None = None,
) -> TagLogger:
    """Wrap an injected logger (or the named module logger) in a TagLogger."""
    if isinstance(logger, TagLogger):
        return logger
    base = logger if logger is not None else logging.getLogger(name)
    if isinstance(base, logging.LoggerAdapter):
        base = base.logger
    return TagLogger(base, {"prefix": prefix} if prefix else {})


def configure_logging(level: str | None = None, log_file: str | Path | None = None) -> None:
    """
    Configure root logging for the CLI: stderr plus an optional append-only file.
    Registers the SUCCESS level name.
    """
    logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")
    level_name = (level or LOG_LEVEL).upper()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )
