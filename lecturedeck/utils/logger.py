"""
Logging configuration for LectureDeck
"""
import sys
from pathlib import Path
from loguru import logger
from config import settings

# Remove default logger
logger.remove()

# Add console handler
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=settings.LOG_LEVEL,
    colorize=True
)

# Add file handler (disabled when LOG_FILE is empty)
if settings.LOG_FILE:
    Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.LOG_FILE,
        rotation="10 MB",
        retention="7 days",
        level=settings.LOG_LEVEL,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"
    )

# Records logged through the bare logger still need a name for the format
logger.configure(extra={"name": "lecturedeck"})


def get_logger(name: str):
    """Get a logger instance with a specific name"""
    return logger.bind(name=name)
