import logging
import sys

from .constants import LOGGER_NAME

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(should_debug: bool = False) -> logging.Logger:
    """Attach a stream handler to the package logger, once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)

    if not any(getattr(h, "_sonos_control", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._sonos_control = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
