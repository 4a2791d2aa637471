# prodmedia/common/logging.py
from __future__ import annotations

import logging


def get_logger(name: str = "prodmedia", level: int | str | None = None) -> logging.Logger:
    """
    Return a logger that plays nice with Uvicorn / the functions runtime if running under it.
    If no handlers are set, we add a basicConfig once.
    """
    if level is None:
        from prodmedia.common.settings import get_settings  # local import: settings may read .env
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)
    return logger
