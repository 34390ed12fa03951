"""Logging setup for the tasklist diagnostic channel."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_HANDLER_MARK = "_tasklist_handler"


def setup_logging(level: int | str = logging.WARNING, log_file: str | Path | None = None) -> None:
    """Attach stderr (and optionally file) handlers to the ``tasklist`` logger.

    Safe to call more than once; handlers from a previous call are replaced.
    """
    logger = logging.getLogger("tasklist")
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, _HANDLER_MARK, False):
            logger.removeHandler(h)
            h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_path), encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(fmt)
        setattr(handler, _HANDLER_MARK, True)
        logger.addHandler(handler)
