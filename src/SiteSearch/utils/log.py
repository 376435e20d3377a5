"""SiteSearch logging utilities.

All modules log through the single ``SiteSearch`` logger. Lines look like
``mm-dd HH:MM:SS [LVL] message`` with LVL one of DEBG/INFO/WARN/ERRO.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final

LOGGER_NAME: Final = "SiteSearch"
LOG_FORMAT: Final = "%(asctime)s [%(levelabbr)s] %(message)s"
DATE_FORMAT: Final = "%m-%d %H:%M:%S"

_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger(LOGGER_NAME)


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """(Re)configure the SiteSearch logger for one CLI command.

    The console handler honours `level`; the optional file handler always
    records DEBUG so a failed run can be inspected afterwards.

    Args:
        level: Console level name (e.g. INFO, DEBUG). Unknown names mean INFO.
        action: CLI command name; names the log file.
        log_to_file: Whether to also write ``<log_dir>/<action>/<action>_<ts>.log``.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file, or None when file logging is off.
    """
    console_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(console_level, int):
        console_level = logging.INFO

    formatter = _AbbrevLevelFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    log.handlers.clear()
    log.addHandler(_handler(logging.StreamHandler(), console_level, formatter))

    log_path = None
    if log_to_file and action:
        log_path = _log_file_path(Path(log_dir or "log"), action)
        log.addHandler(_handler(logging.FileHandler(log_path, encoding="utf-8"), logging.DEBUG, formatter))

    log.setLevel(min(logging.DEBUG, console_level))
    log.propagate = False
    return log_path


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _log_file_path(log_dir: Path, action: str) -> Path:
    action_dir = log_dir / action
    action_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%m%d%H%M%S")
    return action_dir / f"{action}_{timestamp}.log"
