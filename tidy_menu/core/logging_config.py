from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Iterable

PROJECT_ROOT = Path(__file__).resolve().parents[2]
LOG_DIR = PROJECT_ROOT / "logs"

_DEFAULT_EXCLUDED_PATHS = ("/health",)


class AccessPathExcludeFilter(logging.Filter):
    """Drop uvicorn access records for noisy paths such as health checks."""

    def __init__(self, paths: Iterable[str] = _DEFAULT_EXCLUDED_PATHS) -> None:
        super().__init__()
        self._paths = tuple(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2]).split("?", 1)[0]
            return path not in self._paths
        return True


def configure_logging(debug: bool = False) -> None:
    """Configure application-wide logging with a rotating file handler."""

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logging.captureWarnings(True)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "filters": {
            "access_exclude": {
                "()": AccessPathExcludeFilter,
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if debug else "INFO",
                "formatter": "verbose",
            },
            "menu_file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": "DEBUG",
                "formatter": "verbose",
                "filename": str(LOG_DIR / "tidy_menu.log"),
                "maxBytes": 5 * 1024 * 1024,
                "backupCount": 5,
                "encoding": "utf-8",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console", "menu_file"],
                "level": "DEBUG",
            },
            "uvicorn": {
                "handlers": ["console", "menu_file"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console", "menu_file"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console", "menu_file"],
                "filters": ["access_exclude"],
                "level": "INFO",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)


__all__ = ["AccessPathExcludeFilter", "configure_logging", "LOG_DIR"]
