"""
Common utility functions for the OCP documentation checker.
"""

import logging
from pathlib import Path
from typing import Optional

import requests
from rich.console import Console
from rich.logging import RichHandler

from ocp_doc_checker.config import CheckerConfig


# Rich consoles: reports go to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)


def setup_logging(
    name: str = "ocp_doc_checker",
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Set up logging with Rich handler."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    console_handler = RichHandler(
        console=err_console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


# Default logger
logger = setup_logging()


def create_session(config: Optional[CheckerConfig] = None) -> requests.Session:
    """Create the shared HTTP session used for all probes."""
    config = config or CheckerConfig()
    session = requests.Session()
    session.headers.update({"User-Agent": config.user_agent})
    return session


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    minutes = seconds // 60
    secs = seconds % 60
    return f"{minutes}m {secs}s"
