"""
Logging setup: one console handler with a timestamped format.
Components receive their logger through constructors instead of importing a global helper.
"""

import logging
import logging.config

from houseback.config import Settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M"


def configure_logging(settings: Settings) -> None:
    """Install the console handler on the root logger. Safe to call more than once."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": settings.log_level.upper(), "handlers": ["console"]},
            "loggers": {
                # SQL echo is controlled by DEBUG through the engine, keep the logger quiet otherwise
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )


def get_logger(name: str = "houseback") -> logging.Logger:
    return logging.getLogger(name)
