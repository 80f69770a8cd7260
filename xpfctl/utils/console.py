"""Terminal output and logging setup."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .constants import APP_NAME, APP_VERSION, STATUS_COLORS

console = Console(highlight=False)


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False):
    """Set up application logging.

    Terminal output goes through rich; the log file (if it can be opened)
    gets the plain timestamped format.

    Args:
        log_file: Optional log file path
        verbose: Log DEBUG messages to the terminal as well
    """
    terminal_handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    terminal_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    handlers = [terminal_handler]

    file_error = None
    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(
                logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            )
            handlers.append(file_handler)
        except OSError as e:
            file_error = e

    logging.basicConfig(level=logging.DEBUG, format='%(message)s', handlers=handlers, force=True)

    logger = logging.getLogger(__name__)
    if file_error is not None:
        logger.warning(f"Could not open log file {log_file}: {file_error}")
    logger.debug("=" * 60)
    logger.debug(f"Starting {APP_NAME} {APP_VERSION}")
    logger.debug("=" * 60)


def status_markup(status_value: str) -> str:
    """Wrap a status string in its rich style.

    Args:
        status_value: ServiceStatus value (e.g. 'active')

    Returns:
        Markup string for console.print
    """
    style = STATUS_COLORS.get(status_value, STATUS_COLORS["unknown"])
    return f"[{style}]{status_value}[/{style}]"
