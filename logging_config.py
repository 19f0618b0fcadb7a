"""
Logging Configuration for the Club Training API

Configures loguru for structured logging with:
- Console output with colors (DEBUG level if DEBUG_LEVEL > 0)
- Error log file with rotation
- Debug log file (only if DEBUG_LEVEL > 0)
"""

import os
import sys

from loguru import logger

DEBUG_LEVEL = int(os.environ.get("DEBUG_LEVEL", 0))
LOG_DIR = os.environ.get("LOG_DIR", "logs")

# Remove default handler
logger.remove()

logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level="DEBUG" if DEBUG_LEVEL > 0 else "INFO",
    colorize=True,
)

os.makedirs(LOG_DIR, exist_ok=True)

logger.add(
    os.path.join(LOG_DIR, "errors.log"),
    format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    level="ERROR",
    rotation="10 MB",
    retention="30 days",
    compression="zip",
)

if DEBUG_LEVEL > 0:
    logger.add(
        os.path.join(LOG_DIR, "debug.log"),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="50 MB",
        retention="7 days",
        compression="zip",
    )

__all__ = ["logger"]
