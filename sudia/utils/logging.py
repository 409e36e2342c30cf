"""
Logging configuration for the sudia data client.

loguru sinks are built from ``LoggingSettings`` (``LOG_LEVEL``, ``LOG_FILE``,
``LOG_ROTATION``, ``LOG_RETENTION``). Console lines go to stderr, keeping
stdout free for the tables the CLI prints.
"""

import os
import sys
from pathlib import Path

from loguru import logger

from sudia.config import LoggingSettings, settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    level: str | None = None,
    log_file: Path | str | None = None,
    config: LoggingSettings | None = None,
) -> list[int]:
    """
    Replace the loguru sinks with the configured ones.

    Args:
        level: Overrides the configured level (e.g. "DEBUG" for ``--debug``)
        log_file: Overrides the configured file sink path
        config: Logging settings; defaults to the global settings

    Returns:
        Ids of the added sinks, console first
    """
    config = config or settings.logging
    level = (level or config.level).upper()
    log_file = log_file or config.file

    logger.remove()
    sink_ids = [logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink_ids.append(
            logger.add(
                log_file,
                level=level,
                format=FILE_FORMAT,
                rotation=config.rotation,
                retention=config.retention,
                compression="gz",
                encoding="utf-8",
            )
        )

    logger.debug(f"Logging configured: level={level}, file={log_file or '-'}")
    return sink_ids


if os.environ.get("DISABLE_LOGGING") != "1":
    setup_logging()
