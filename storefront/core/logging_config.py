# storefront/core/logging_config.py
"""
Logging setup shared by the CLI and the development backend.
"""

import logging
import os

from storefront.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """Apply LOG_LEVEL/LOG_FORMAT and, if configured, log to a file as well."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    handlers = [logging.StreamHandler()]

    if settings.LOG_FILE_PATH:
        log_dir = os.path.dirname(settings.LOG_FILE_PATH)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_FILE_PATH))

    logging.basicConfig(level=level, format=settings.LOG_FORMAT, handlers=handlers, force=True)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
