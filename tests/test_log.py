import logging

import pytest

from src.log import SeverityFormatter, configure_logging


def make_record(level, msg):
    return logging.LogRecord("test", level, __file__, 1, msg, None, None)


def test_severity_prefixes():
    fmt = SeverityFormatter()
    assert fmt.format(make_record(logging.ERROR, "times API: failed to fetch")) == "Error: times API: failed to fetch"
    assert fmt.format(make_record(logging.WARNING, "careful")) == "Warning: careful"
    assert fmt.format(make_record(logging.INFO, "setting intensity to 5")) == "Info: setting intensity to 5"


def test_configure_logging_stderr(capsys):
    configure_logging("stderr")
    logging.info("hello")
    assert "Info: hello" in capsys.readouterr().err


def test_configure_logging_replaces_own_handler():
    root = logging.getLogger()
    configure_logging("stderr")
    count = len(root.handlers)
    configure_logging("stderr")
    assert len(root.handlers) == count


def test_configure_logging_rejects_unknown_device():
    with pytest.raises(ValueError):
        configure_logging("console")
