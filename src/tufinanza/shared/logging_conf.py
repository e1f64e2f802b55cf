# src/tufinanza/shared/logging_conf.py
"""
Logging Configuration - Handlers Built from Settings

Modules log through logging.getLogger(__name__); setup_logging attaches the
root handlers once at startup from the LOG_* settings:
- LOG_LEVEL: root level name (INFO by default)
- TUFINANZA_LOG_STDOUT: console output on/off
- LOG_DIR or LOG_FILE: rotating file output (LOG_DIR wins, file tufinanza.log)

Files that USE this module:
- tufinanza.app (logging initialization in main)

Files that this module USES:
- tufinanza.config (Settings with the LOG_* fields)
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from tufinanza.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "tufinanza.log"


def resolve_log_path(config: Settings) -> Optional[Path]:
    """Log file location from settings, or None when file logging is off."""
    if config.log_dir:
        return Path(config.log_dir) / LOG_FILE_NAME
    if config.log_file:
        return Path(config.log_file)
    return None


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, DATE_FORMAT)


def setup_logging(config: Optional[Settings] = None) -> Optional[Path]:
    """
    Configure root logging from settings.

    Console and rotating file handlers are independent; with both disabled
    the console handler is used anyway.

    Args:
        config: Settings to read (default: global settings)

    Returns:
        Path of the log file, or None when logging only to stdout
    """
    config = config or default_settings
    handlers: List[logging.Handler] = []

    if config.log_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    log_path = resolve_log_path(config)
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_path,
                maxBytes=config.log_max_bytes,
                backupCount=config.log_backup_count,
                encoding="utf-8",
            )
        )

    if not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(_formatter())

    logging.basicConfig(level=config.log_level, handlers=handlers, force=True)
    logging.getLogger(__name__).info(
        "Logging configured: level=%s, file=%s", config.log_level, log_path or "-"
    )
    return log_path
