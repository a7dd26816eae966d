"""
Logging setup for convo_core.

Handlers are attached to the ``convo_core`` parent logger only, so the
window, reset and API loggers (convo_core.context.window, ...) share
one configuration and host applications keep control of the root logger.

Environment:
    CONVO_CORE_LOG_LEVEL   default level when none is passed
    CONVO_CORE_LOG_FILE    rotating log file when none is passed
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

LOG_LEVEL_ENV_VAR = "CONVO_CORE_LOG_LEVEL"
LOG_FILE_ENV_VAR = "CONVO_CORE_LOG_FILE"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

_logging_configured = False


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the package logger once per process.

    Args:
        level: Level name. Falls back to CONVO_CORE_LOG_LEVEL, then INFO.
        log_file: Rotating log file path. Falls back to CONVO_CORE_LOG_FILE;
            ``"none"`` or an unset value keeps output on the console.
    """
    global _logging_configured
    if _logging_configured:
        return
    _logging_configured = True

    level = level or os.environ.get(LOG_LEVEL_ENV_VAR) or "INFO"
    log_file = log_file or os.environ.get(LOG_FILE_ENV_VAR)
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger("convo_core")
    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if log_file and log_file.lower() != "none":
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
