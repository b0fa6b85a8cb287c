"""Process-wide logging configuration.

Modules log through logging.getLogger(__name__); this sets up the handlers
once at the application boundary (API startup, CLI entrypoint, Alembic).
"""

from __future__ import annotations

import logging.config


def configure_logging(level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger; src logs at level."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "src": {"level": level.upper()},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
            "root": {"level": "WARNING", "handlers": ["stderr"]},
        }
    )
