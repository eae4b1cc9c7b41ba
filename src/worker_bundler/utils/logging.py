# logging.py
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

LOGGER_NAME = "worker_bundler"


def setup_logger(log_dir: Optional[Path] = None) -> logging.Logger:
    """Set up logging configuration.

    Console output is INFO and above; a per-run file under ``log_dir``
    (defaults to the configured log directory) receives everything.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    if logger.handlers:
        return logger

    if log_dir is None:
        from ..config.settings import settings
        log_dir = settings.log_dir

    # Build log file, only created once something is logged
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    debug_handler = logging.FileHandler(
        log_dir / f"build_{timestamp}.log",
        delay=True
    )
    debug_handler.setLevel(logging.DEBUG)
    debug_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    log_dir.mkdir(parents=True, exist_ok=True)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.set_name("console")
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        '%(levelname)s: %(message)s'
    ))

    logger.addHandler(debug_handler)
    logger.addHandler(console_handler)

    return logger


def set_verbose(verbose: bool = True) -> None:
    """Show debug messages (metadata decisions, cleanup) on the console."""
    for handler in setup_logger().handlers:
        if handler.get_name() == "console":
            handler.setLevel(logging.DEBUG if verbose else logging.INFO)
