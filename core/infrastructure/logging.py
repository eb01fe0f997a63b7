"""
Logging infrastructure.

One stream handler per named logger, shared format across the service.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name (usually module name)
        level: Level applied the first time the logger is configured

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False
    return logger


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger for the API process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
