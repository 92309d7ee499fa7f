import logging
from datetime import datetime

import pytest

from ateproject.devlog import DailyFileHandler, install_log


def _record(level, message, when):
    record = logging.LogRecord("x", level, "/src/mod.py", 42, message, None, None, func="run")
    record.created = when.timestamp()
    return record


WHEN = datetime(2021, 5, 3, 10, 20, 30, 123000)


def test_emit_writes_dated_file(tmp_path):
    handler = DailyFileHandler(tmp_path / "logs")
    handler.emit(_record(logging.WARNING, "hello", WHEN))
    content = (tmp_path / "logs" / "2021-05-03.txt").read_text(encoding="utf-8")
    assert content == "[2021-05-03 10:20:30.123] Warning: /src/mod.py run - 42:\thello\n"


def test_emit_appends(tmp_path):
    handler = DailyFileHandler(tmp_path)
    handler.emit(_record(logging.INFO, "one", WHEN))
    handler.emit(_record(logging.INFO, "two", WHEN))
    lines = (tmp_path / "2021-05-03.txt").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("\tone")
    assert lines[1].endswith("\ttwo")


@pytest.mark.parametrize(
    "level,name",
    [
        (logging.DEBUG, "Debug"),
        (logging.INFO, "Info"),
        (logging.WARNING, "Warning"),
        (logging.ERROR, "Critical"),
        (logging.CRITICAL, "Fatal"),
    ],
)
def test_level_names(tmp_path, level, name):
    handler = DailyFileHandler(tmp_path)
    assert f"] {name}: " in handler.format(_record(level, "m", WHEN))


def test_install_log_routes_root_logger(tmp_path):
    handler = install_log(tmp_path)
    try:
        logging.getLogger("ateproject.sample").debug("routed")
    finally:
        logging.getLogger().removeHandler(handler)
    directory = tmp_path / "Log" / "TreeATEDev"
    files = list(directory.glob("*.txt"))
    assert len(files) == 1
    assert "Debug:" in files[0].read_text(encoding="utf-8")
    assert handler.directory == directory