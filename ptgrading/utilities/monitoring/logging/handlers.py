import os
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional


def _ensure_parent_dir(filename: str) -> None:
    parent = os.path.dirname(filename)
    if parent:
        os.makedirs(parent, exist_ok=True)


class CustomRotatingFileHandler(RotatingFileHandler):
    def __init__(
        self,
        filename: str,
        max_bytes: int = 5 * 1024 * 1024,  # 5MB
        backup_count: int = 5,
        encoding: Optional[str] = "utf-8"
    ):
        _ensure_parent_dir(filename)
        super().__init__(
            filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=encoding,
            delay=True
        )


class CustomTimedRotatingFileHandler(TimedRotatingFileHandler):
    def __init__(
        self,
        filename: str,
        when: str = "midnight",
        interval: int = 1,
        backup_count: int = 30,
        encoding: Optional[str] = "utf-8"
    ):
        _ensure_parent_dir(filename)
        super().__init__(
            filename,
            when=when,
            interval=interval,
            backupCount=backup_count,
            encoding=encoding,
            delay=True
        )
