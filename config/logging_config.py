"""
Logging Configuration
Sets up logging for the drawing board, service client and API.
"""
import logging
import sys
from typing import Optional, Union

# Top-level packages whose module loggers should share the handlers
PACKAGE_LOGGERS = ("drawing", "services", "serving", "utils", "api", "cli_solve")


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configure console (and optional file) logging for the application.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG")
        log_file: Optional path to save logs to a file.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Avoid duplicate output when called twice (e.g. CLI then server)
        for old_handler in list(logger.handlers):
            old_handler.close()
            logger.removeHandler(old_handler)

        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("drawing").debug("Logging initialized at level %s", logging.getLevelName(level))
