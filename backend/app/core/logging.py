# backend/app/core/logging.py
"""
Configuration unique du logging applicatif.
Appelée une fois au démarrage (main.py). Les modules utilisent
logging.getLogger(__name__) — jamais de handler local.
"""
import logging
from logging.config import dictConfig


def configure_logging(level: str = "INFO") -> None:
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-7s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "app": {"handlers": ["console"], "level": level.upper(), "propagate": False},
        },
        "root": {"handlers": ["console"], "level": logging.WARNING},
    })
