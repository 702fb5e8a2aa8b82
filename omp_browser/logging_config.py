"""
Logging configuration for omp-browser.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(debug: bool = False, log_file: Optional[Path] = None,
                  log_level: Optional[str] = None, console: bool = True):
    """
    Configure logging for omp-browser.

    Args:
        debug: Enable debug logging
        log_file: Optional file to write logs to
        log_level: Override log level (TRACE, DEBUG, INFO, WARNING, ERROR)
        console: Also log to stderr. Must be False while curses owns the terminal.
    """
    # Determine log level
    if log_level:
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Create formatter
    if level <= logging.DEBUG:
        # Include timestamp and module for debug
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = logging.Formatter('%(asctime)s %(levelname)s: %(message)s',
                                      datefmt='%Y-%m-%d %H:%M:%S')

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    root_logger.handlers.clear()

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
    elif not log_file:
        # Nowhere to write; keep records from reaching the lastResort handler
        root_logger.addHandler(logging.NullHandler())

    # Suppress some noisy libraries unless in debug mode
    if level > logging.DEBUG:
        logging.getLogger('asyncio').setLevel(logging.WARNING)
        logging.getLogger('aiohttp').setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger.

    Args:
        name: Logger name (usually __name__)
    """
    return logging.getLogger(name)


# Custom TRACE level for raw HTTP payloads
TRACE = 5
logging.addLevelName(TRACE, 'TRACE')

def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)

# Add trace method to Logger class
logging.Logger.trace = trace
