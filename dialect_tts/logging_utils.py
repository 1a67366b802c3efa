from __future__ import annotations

import logging
import os
from typing import Optional


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a console logger for a gateway module.

    The request middleware, the synthesis client and the CLI all log through
    here; the format carries the module name so rewrite fallbacks and remote
    failures can be traced per request. Credentials and user text are never
    passed to these loggers. ``LOG_LEVEL`` overrides the default INFO level.
    """

    logger_name = name or "dialect-tts"
    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    return logger
