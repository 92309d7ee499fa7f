"""Daily log files for the project editor."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

_LEVEL_NAMES = {
    logging.DEBUG: "Debug",
    logging.INFO: "Info",
    logging.WARNING: "Warning",
    logging.ERROR: "Critical",
    logging.CRITICAL: "Fatal",
}


def _level_name(level: int) -> str:
    for threshold in sorted(_LEVEL_NAMES, reverse=True):
        if level >= threshold:
            return _LEVEL_NAMES[threshold]
    return "Debug"


class DailyFileHandler(logging.Handler):
    """Append each record to ``<directory>/<yyyy-mm-dd>.txt``."""

    def __init__(self, directory):
        super().__init__()
        self.directory = Path(directory)

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(round(record.created, 3))
        when = stamp.strftime("%Y-%m-%d %H:%M:%S") + f".{stamp.microsecond // 1000:03d}"
        return (
            f"[{when}] {_level_name(record.levelno)}: "
            f"{record.pathname} {record.funcName} - {record.lineno}:\t"
            f"{record.getMessage()}"
        )

    def path_for(self, record: logging.LogRecord) -> Path:
        """The file that ``record`` goes to."""
        day = datetime.fromtimestamp(round(record.created, 3)).strftime("%Y-%m-%d")
        return self.directory / f"{day}.txt"

    def emit(self, record):
        try:
            line = self.format(record)
            self.directory.mkdir(parents=True, exist_ok=True)
            with self.path_for(record).open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except Exception:
            self.handleError(record)


def install_log(app_dir) -> DailyFileHandler:
    """Send all log records to daily files under ``<app_dir>/Log/TreeATEDev``."""
    handler = DailyFileHandler(Path(app_dir) / "Log" / "TreeATEDev")
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return handler