"""
Logging Configuration
Sets up console (and optional file) logging for the calibration core.
"""
import logging
import sys

import config

# Loggers of the core modules; each module logs under its own name.
CORE_LOGGERS = ("georef", "validator", "distribution", "migrate")


def setup_logging(level=None, log_file=None):
    """
    Configures the loggers of the calibration core modules.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG"). Defaults to config.LOG_LEVEL.
        log_file: Optional path to also save logs to a file.
    """
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in CORE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate output when called more than once
        if logger.handlers:
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger("georef").info("Logging initialized.")
