"""
Centralized Logging Configuration

Sets one stream handler on the root logger. Inside containers the timestamp
is left to the runtime; locally the formatter adds it.

Usage:
    from practice_time.utils.logging_config import configure_logging
    configure_logging()
"""
import os
import sys
import logging
from typing import Optional

# Detect container environment
IS_CONTAINERIZED = bool(
    os.environ.get('FLY_APP_NAME') or  # Fly.io
    os.environ.get('KUBERNETES_SERVICE_HOST') or  # Kubernetes
    os.path.exists('/.dockerenv')  # Docker
)

CONTAINER_FORMAT = "[%(name)s] %(levelname)s: %(message)s"
LOCAL_FORMAT = "[%(asctime)s] [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Supabase client transport is chatty at INFO
NOISY_LOGGERS = ('httpx', 'httpcore', 'hpack', 'postgrest')


def resolve_log_level(value: Optional[str], default: int = logging.INFO) -> int:
    """
    Map a LOG_LEVEL value ("debug", "WARNING", "10") to a logging level.

    Unknown values fall back to ``default``.
    """
    if not value:
        return default
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def configure_logging(level: Optional[int] = None, force: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level (default: LOG_LEVEL env, else INFO)
        force: Force reconfiguration even if already configured
    """
    root_logger = logging.getLogger()

    if root_logger.handlers and not force:
        return

    if force:
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    if level is None:
        level = resolve_log_level(os.getenv('LOG_LEVEL'))

    log_format = CONTAINER_FORMAT if IS_CONTAINERIZED else LOCAL_FORMAT
    datefmt = None if IS_CONTAINERIZED else DATE_FORMAT

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=datefmt))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
