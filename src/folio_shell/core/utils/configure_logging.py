# src/folio_shell/core/utils/configure_logging.py
import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

Level = Union[str, int]


class TqdmWriteHandler(logging.Handler):
    """Routes log records through `tqdm.write()` so they print above the validate progress bar."""

    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
        except Exception:
            self.handleError(record)


def _to_level(level: Level, fallback: int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), fallback)
    return level


def _apply_levels(levels: Optional[Dict[str, Level]], fallback: int) -> None:
    for name, level in (levels or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, fallback))


def configure_logger(
        general_level: Level = 'INFO',
        module_specific_levels: Optional[Dict[str, Level]] = None,
        silenced_loggers: Optional[Dict[str, Level]] = None
) -> None:
    """
    Installs the tqdm-aware handler on the root logger, replacing any existing one.
    Values come from the 'debug' section of settings.json.
    """
    handler = TqdmWriteHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(_to_level(general_level, logging.INFO))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    _apply_levels(module_specific_levels, logging.INFO)
    # Silenced loggers default to CRITICAL when the level name is unknown
    _apply_levels(silenced_loggers, logging.CRITICAL)
