from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "BD_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return

    raw_level = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or "WARNING").upper()
    logger = logging.getLogger("bindeps")
    logger.setLevel(logging.getLevelNamesMapping().get(raw_level, logging.WARNING))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
