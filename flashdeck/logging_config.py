from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a JSON console handler to the ``flashdeck`` logger."""
    logger = logging.getLogger("flashdeck")
    logger.setLevel(level)
    logger.propagate = False

    formatter = JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)

    return logger
