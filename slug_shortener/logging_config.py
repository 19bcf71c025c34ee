"""
Application logging configuration.

Every module logs through ``logging.getLogger(__name__)``, so all records end
up under the ``slug_shortener`` logger configured here.
"""
import logging
import sys

LOGGER_NAME = "slug_shortener"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure and return the application logger.

    Output goes to stdout with timestamp, logger name, level and message,
    which works the same under uvicorn locally and in a container.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)

    Returns:
        logging.Logger: Configured logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Prevent duplicate handlers if called multiple times (one app per test)
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    return logger
