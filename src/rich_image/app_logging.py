"""Logging configuration helpers."""

import logging

_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Attach one stream handler to the package logger and set its level.

    Repeated calls only update the level.
    """
    logger = logging.getLogger("rich_image")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
