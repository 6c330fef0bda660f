# src/pagegrader/utils/configure_logging.py
import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

Level = Union[str, int]


class LogWithTqdm(logging.Handler):
    """Writes records through `tqdm.write()` on stderr; stdout stays reserved for the report."""

    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def _to_level(level: Level, fallback: int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), fallback)


def _apply_levels(levels: Optional[Dict[str, Level]], fallback: int) -> None:
    for name, level in (levels or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, fallback))


def configure_logger(
        general_level: Level = 'WARNING',
        module_levels: Optional[Dict[str, Level]] = None,
        silenced_loggers: Optional[Dict[str, Level]] = None
) -> logging.Handler:
    """
    Installs the grader's single log handler on the root logger.

    Args:
        general_level: Root level, e.g. 'WARNING' or logging.DEBUG.
        module_levels: Per-logger levels, e.g. {'pagegrader.rubric.engine': 'INFO'}.
        silenced_loggers: Loggers to quiet down; unknown level names mean CRITICAL.

    Returns:
        The installed handler.
    """
    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.WARNING))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    _apply_levels(module_levels, logging.INFO)
    _apply_levels(silenced_loggers, logging.CRITICAL)
    return handler
