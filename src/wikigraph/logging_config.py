"""
Logging configuration for the wikigraph command line.

Command output goes to stdout, logs always go to stderr. The breadth first
search logs its progress on the `wikigraph.analyzer` logger, which can be
tuned on its own: searches over the live API are long and their progress is
often the only thing worth seeing at DEBUG.
"""

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

SEARCH_LOGGER = "wikigraph.analyzer"

# Libraries that log every request at INFO/DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite")


def resolve_level(level: Optional[str], default: int = logging.INFO) -> int:
    """Numeric level for a level name, `default` when unset or unknown."""
    if not level:
        return default
    numeric_level = logging.getLevelName(level.upper())
    return numeric_level if isinstance(numeric_level, int) else default


def setup_logging(
    level: str = "INFO",
    use_rich: Optional[bool] = None,
    search_level: Optional[str] = None,
) -> None:
    """
    Set up logging for wikigraph and its data sources.

    Args:
        level: Log level for everything (DEBUG, INFO, WARNING, ERROR)
        use_rich: Whether to use Rich's colored output. By default Rich is
            used only when stderr is a terminal, so piped or captured output
            stays plain text.
        search_level: Log level for the search progress of the analyzer,
            defaults to `level`
    """
    numeric_level = resolve_level(level)
    if use_rich is None:
        use_rich = sys.stderr.isatty()

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_rich:
        handler = RichHandler(
            console=Console(file=sys.stderr),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
            log_time_format="[%H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)-5s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))
    # Levels are decided per logger, the handler lets everything through
    root_logger.addHandler(handler)

    logging.getLogger(SEARCH_LOGGER).setLevel(resolve_level(search_level, default=numeric_level))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    logging.getLogger(__name__).debug(
        f"Logging configured: level={logging.getLevelName(numeric_level)}, "
        f"search={logging.getLevelName(logging.getLogger(SEARCH_LOGGER).level)}, rich={use_rich}"
    )
