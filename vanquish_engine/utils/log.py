"""
Logging setup for long-running use of the engine (self-play, benchmarks).
"""

import logging
from pathlib import Path
from typing import Optional, Union

DEFAULT_LOG_DIR = Path.home() / ".vanquish"


def setup_logger(debug: bool = True, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Setup file-based logger for engine debugging.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_file: Destination file (default: ~/.vanquish/engine.log)

    Returns:
        Configured logger instance (the package's root logger)
    """
    if log_file is None:
        DEFAULT_LOG_DIR.mkdir(exist_ok=True)
        log_file = DEFAULT_LOG_DIR / "engine.log"

    logger = logging.getLogger("vanquish_engine")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
