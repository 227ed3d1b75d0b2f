"""Loguru sink configuration for the API server and the CLI.

Ordinary records are written to stderr as text.  Records bound with
``json_output=True`` (lookup results, for example) are written as
serialized JSON instead so a log shipper can pick them out.  A
``log_dir`` adds a text file rotated daily.
"""

import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "event-logistics.log"

_TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def _structured(record) -> bool:  # type: ignore[no-untyped-def]
    return bool(record["extra"].get("json_output", False))


def _plain(record) -> bool:  # type: ignore[no-untyped-def]
    return not _structured(record)


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Replace every Loguru sink with the service configuration.

    Called by both the API lifespan and the CLI callback, so it must be
    safe to call more than once.

    Args:
        log_level: Minimum level, case-insensitive.
        log_dir: Directory for the rotating log file (24h rotation,
            7 days retention).  No file is written when None.
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_TEXT_FORMAT, filter=_plain)
    logger.add(sys.stderr, level=level, serialize=True, filter=_structured)

    if not log_dir:
        return

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    logger.add(
        directory / LOG_FILE_NAME,
        level=level,
        format=_TEXT_FORMAT,
        rotation="24h",
        retention="7 days",
    )
