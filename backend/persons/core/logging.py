from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict

from persons.core.settings import Settings, settings

ROOT_LOGGER = "persons"
DB_LOGGER = "persons.core.db"
CLIENT_LOGGER = "persons.client"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _at_least_warning(level: str) -> str:
    """Keep WARNING records flowing even when ``level`` is stricter."""

    if logging.getLevelNamesMapping()[level] > logging.WARNING:
        return "WARNING"
    return level


def _rotating_file(path: Path, level: str, config: Settings) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": "standard",
        "filename": str(path),
        "maxBytes": config.log_max_bytes,
        "backupCount": config.log_backup_count,
        "encoding": "utf-8",
    }


def _build_logging_config(log_dir: Path, config: Settings = settings) -> Dict[str, Any]:
    # Handlers pass everything through; the logger levels below do the filtering.
    handlers = ["console", "app_file", "error_file"]
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT, "datefmt": LOG_DATEFMT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "NOTSET",
                "formatter": "standard",
            },
            "app_file": _rotating_file(log_dir / "app.log", "NOTSET", config),
            "error_file": _rotating_file(log_dir / "errors.log", "ERROR", config),
        },
        "loggers": {
            ROOT_LOGGER: {"level": config.log_level},
            # double-close diagnostics from the session executor
            DB_LOGGER: {"level": _at_least_warning(config.log_level)},
            # per-request lines from the person endpoint client
            CLIENT_LOGGER: {"level": config.client_log_level},
            # the client already logs each request
            "httpx": {"level": "WARNING"},
        },
        "root": {"level": config.log_level, "handlers": handlers},
    }


def setup_logging(log_directory: str | None = None) -> Path:
    """Configure logging once at application start and return the log directory."""

    log_dir = Path(log_directory or settings.log_directory).resolve()
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(_build_logging_config(log_dir))
    return log_dir


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or ROOT_LOGGER)
