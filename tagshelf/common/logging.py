# tagshelf/common/logging.py
from __future__ import annotations

import logging


def get_logger(name: str = "tagshelf", level: int | str | None = None) -> logging.Logger:
    """
    Return a named logger. If nothing has configured logging yet,
    we add a basicConfig once. `level` accepts an int or a name like "DEBUG".
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
