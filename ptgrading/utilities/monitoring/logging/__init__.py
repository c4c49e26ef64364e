from typing import Any
import logging
import sys
from .handlers import CustomRotatingFileHandler, CustomTimedRotatingFileHandler
from .formatters import JSONFormatter


def setup_logger(
    name: str,
    log_file: str,
    level: int = logging.INFO,
    rotation_type: str = "size",
    console_level: int = logging.WARNING,
    **kwargs: Any
) -> logging.Logger:
    """Set up a logger with a JSON file handler and a console handler.

    Handlers are attached only once, so repeated calls for the same
    logger name return the already configured instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    if rotation_type == "time":
        file_handler = CustomTimedRotatingFileHandler(
            log_file,
            when=kwargs.get("when", "midnight"),
            interval=kwargs.get("interval", 1),
            backup_count=kwargs.get("backup_count", 30),
        )
    else:
        file_handler = CustomRotatingFileHandler(
            log_file,
            max_bytes=kwargs.get("max_bytes", 5 * 1024 * 1024),
            backup_count=kwargs.get("backup_count", 5),
        )

    file_handler.setFormatter(JSONFormatter())
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(console_handler)

    return logger


__all__ = [
    "setup_logger",
    "JSONFormatter",
    "CustomRotatingFileHandler",
    "CustomTimedRotatingFileHandler",
]
