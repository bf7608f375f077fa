"""
Logging Setup
Routes progress lines to stdout and errors to stderr
"""

import os
import sys
from typing import Optional
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"

ERROR_LEVEL_NO = logger.level("ERROR").no


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """
    Replace loguru's default handler with the deployer's sinks

    Args:
        level: Minimum console level (None = LOG_LEVEL or INFO)
        log_file: Optional log file path (None = DEPLOY_LOG_FILE)
    """
    level = level or os.getenv('LOG_LEVEL', 'INFO')
    log_file = log_file or os.getenv('DEPLOY_LOG_FILE')

    logger.remove()
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=level,
        filter=lambda record: record["level"].no < ERROR_LEVEL_NO
    )
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level="ERROR"
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
