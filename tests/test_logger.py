from datetime import datetime

import pytest

from weatherchain.logger import Logger, LoggerNotOpenError, LogLevel


def _parse_line(line):
    """Split a log line into its timestamp, level and message."""
    assert line[0] == "["
    stamp, rest = line[1:].split("] [", 1)
    level, message = rest.split("] ", 1)
    return datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S"), level, message


def test_log_line_format(tmp_path):
    path = tmp_path / "server.log"
    logger = Logger()
    logger.set_log_file(path)
    before = datetime.now().replace(microsecond=0)
    logger.log(LogLevel.INFO, "hello")
    after = datetime.now()
    logger.close()
    text = path.read_text()
    assert text.endswith("\n")
    assert text.count("\n") == 1
    stamp, level, message = _parse_line(text.rstrip("\n"))
    assert (level, message) == ("INFO", "hello")
    assert before <= stamp <= after


@pytest.mark.parametrize("level", list(LogLevel))
def test_level_labels(tmp_path, level):
    path = tmp_path / "levels.log"
    logger = Logger()
    logger.set_log_file(path)
    logger.log(level, "msg")
    logger.close()
    assert f"] [{level.name}] msg" in path.read_text()


def test_appends_to_existing_file(tmp_path):
    path = tmp_path / "server.log"
    path.write_text("earlier\n")
    logger = Logger()
    logger.set_log_file(path)
    logger.log(LogLevel.WARN, "later")
    logger.close()
    lines = path.read_text().splitlines()
    assert lines[0] == "earlier"
    _, level, message = _parse_line(lines[1])
    assert (level, message) == ("WARN", "later")


def test_log_without_file_raises():
    with pytest.raises(LoggerNotOpenError):
        Logger().log(LogLevel.ERROR, "nowhere")


def test_log_after_close_raises(tmp_path):
    logger = Logger()
    logger.set_log_file(tmp_path / "a.log")
    logger.close()
    with pytest.raises(LoggerNotOpenError):
        logger.log(LogLevel.INFO, "closed")


def test_switching_files(tmp_path):
    first, second = tmp_path / "first.log", tmp_path / "second.log"
    logger = Logger()
    logger.set_log_file(first)
    logger.log(LogLevel.INFO, "one")
    logger.set_log_file(second)
    logger.log(LogLevel.INFO, "two")
    logger.close()
    assert "one" in first.read_text() and "two" not in first.read_text()
    assert "two" in second.read_text()


def test_unopenable_file_raises(tmp_path):
    with pytest.raises(OSError):
        Logger().set_log_file(tmp_path / "missing" / "x.log")