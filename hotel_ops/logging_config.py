"""Logging setup for the hotel_ops package."""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger("hotel_ops")
    if not any(getattr(h, "_hotel_ops", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._hotel_ops = True
        logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger
