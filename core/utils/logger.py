"""
Loguru-based logging configuration
"""
import sys
from pathlib import Path
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logger(log_level: str = "INFO", log_file: str = None, debug: bool = False):
    """
    Configure loguru logger with consistent formatting

    In debug mode the console output is human readable and the level is
    forced to DEBUG, otherwise every record is written as a JSON line.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging to file
        debug: Switch console output to the human readable format

    Returns:
        Logger bound to this tool, to be passed to the components
    """
    # Remove default handler
    logger.remove()

    level = "DEBUG" if debug else log_level

    if debug:
        # Console handler with colors
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=level,
            colorize=True,
        )
    else:
        logger.add(sys.stderr, level=level, serialize=True)

    # File handler if specified
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=level,
            rotation="500 MB",
            retention="30 days",
            compression="zip",
        )

    logger.debug(f"Logger initialized with level: {level}")
    return logger.bind(component="aggregator-cleaner")
