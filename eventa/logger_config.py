"""Centralized logging configuration."""

import sys

from loguru import logger

from eventa.config import LOG_LEVEL


log_format = ' | '.join(
    (
        '<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>',
        '<lvl>{level:<8}</>',
        '<c>{name}::{function}:{line}</>',
        '{message}',
    )
)

# Remove default handler to avoid duplicate output and use custom format
logger.remove()
logger.add(sys.stderr, format=log_format, level=LOG_LEVEL)
