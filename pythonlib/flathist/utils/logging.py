from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level(level: str | int | None, default: int) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        return getattr(logging, level.upper(), default)
    return default


def _own_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if getattr(h, "_flathist", False)]


def setup_logger(
    name: str = "flathist",
    level: str | int = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Send records of ``name`` to stderr and, with ``log_file``, to a file.

    Calling it again only updates the level. Handlers installed by others
    (e.g. pytest's capture) are left alone and do not count.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level, logging.INFO))
    logger.propagate = False

    if _own_handlers(logger):
        return logger

    formatter = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for h in handlers:
        h._flathist = True
        h.setFormatter(formatter)
        logger.addHandler(h)
    return logger
