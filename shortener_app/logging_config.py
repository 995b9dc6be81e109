"""Application-wide logging initialization

Call `initialize_logging()` once at startup (main.py does it) before any
other logging is done.

Logging format:
    2026-01-01 12:00:00,000 INFO shortener_app.services.url_service: Created short URL abc123
"""

import logging
import logging.config

from shortener_app.config import settings


def initialize_logging(log_level: str = None) -> None:
    log_level = (log_level or settings.log_level).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'default',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
