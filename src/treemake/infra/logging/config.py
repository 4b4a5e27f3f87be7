from __future__ import annotations

"""
Logging Settings.

Settings consumed by configure_logging. The CLI derives them from its
--debug and --log-file flags.
"""

import logging
from dataclasses import dataclass
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings for one run of the generator.

    Attributes:
        level: Level name such as 'DEBUG' or 'INFO'.
        console: Whether records are written to stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept beside the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str] = None) -> "LoggingConfig":
        return cls(level="DEBUG" if debug else "INFO", log_file=log_file)

    def level_number(self) -> int:
        """Numeric level; names unknown to logging mean INFO."""
        value = logging.getLevelName((self.level or "").strip().upper())
        return value if isinstance(value, int) else logging.INFO
