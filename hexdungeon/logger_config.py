"""
Konfiguracja logowania (stdlib logging + dictConfig).

Moduły biblioteki tylko tworzą `logging.getLogger(__name__)`.
Handlery ustawia dopiero punkt wejścia (main.py, api/main.py).
"""

import logging.config
import sys
from typing import Optional


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Ustawia logowanie na konsolę (i opcjonalnie do pliku).

    Args:
        verbose: DEBUG dla pakietu hexdungeon (domyślnie WARNING)
        log_file: Ścieżka pliku na błędy (rotowany, 10MB)
    """
    handlers = {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": sys.stderr,
        },
    }
    if log_file:
        handlers["file"] = {
            "level": "ERROR",
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "standard",
            "filename": log_file,
            "maxBytes": 10485760,
            "backupCount": 5,
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers),
                "level": "WARNING",
            },
            "hexdungeon": {
                "level": "DEBUG" if verbose else "WARNING",
                "propagate": True,
            },
        },
    }

    logging.config.dictConfig(logging_config)
