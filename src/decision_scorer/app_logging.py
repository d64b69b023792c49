"""
Logging utilities for the decision scorer.

The engine modules log through ``get_logger``, which names each logger
under the package root (``decision_scorer.<component>``). This module configures the package
root logger, with rich console output in dev mode and a plain stream
handler otherwise.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


# Custom theme for log levels
_LOG_THEME = Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "green",
    "logging.level.warning": "yellow",
    "logging.level.error": "bold red",
    "logging.level.critical": "bold white on red",
    "log.time": "dim",
    "log.message": "default",
    "log.path": "dim",
})

# Logs go to stderr so JSON written to stdout stays clean
_console = Console(theme=_LOG_THEME, stderr=True)

ROOT_LOGGER_NAME = 'decision_scorer'


def setup_logging(
    level: str = 'INFO',
    log_format: Optional[str] = None,
    dev_mode: bool = False,
    show_path: bool = False,
    rich_tracebacks: bool = True,
) -> None:
    """
    Setup logging for the decision_scorer package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format string for the plain handler. If None, uses default format.
        dev_mode: Whether to use rich console output (default: False)
        show_path: Whether to show file path in rich console logs (default: False)
        rich_tracebacks: Whether to use rich for exception tracebacks (default: True)
    """
    if log_format is None:
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    level_value = getattr(logging, level.upper())

    if dev_mode:
        handler: logging.Handler = RichHandler(
            console=_console,
            level=level_value,
            show_path=show_path,
            rich_tracebacks=rich_tracebacks,
            markup=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format))
    handler.setLevel(level_value)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level_value)
    logger.handlers.clear()
    logger.addHandler(handler)
    # Prevent propagation to root logger
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger that is a child of the 'decision_scorer' root logger.

    Args:
        name: Component name (e.g. 'engine'); a name already starting with
              'decision_scorer' is used as-is, so ``get_logger(__name__)`` works.
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# Library default: stay silent until the host application configures logging
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
