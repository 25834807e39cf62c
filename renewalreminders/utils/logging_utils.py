"""Logging setup for the RenewalReminders CLI."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level="WARNING"):
    """
    Install a stream handler on the package logger.

    Args:
        level (str or int): Logging level name or number

    Returns:
        logging.Logger: The configured package logger
    """
    if isinstance(level, str):
        level_name = level.upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger("renewalreminders")
    logger.setLevel(level)

    if not any(getattr(h, "_renewalreminders", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._renewalreminders = True
        logger.addHandler(handler)

    return logger
