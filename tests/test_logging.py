"""Tests for logging setup and structured error output."""

import json
import logging

from ledpanel.core.errors import IndexOutOfBoundsError
from ledpanel.core.logging import JSONFormatter, SimpleFormatter, setup_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("ledpanel.engine", logging.INFO, __file__, 10, "step %d", (3,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    data = json.loads(JSONFormatter().format(make_record(session="loop")))

    assert data["message"] == "step 3"
    assert data["level"] == "INFO"
    assert data["session"] == "loop"
    assert "args" not in data


def test_simple_formatter_uses_short_logger_name():
    line = SimpleFormatter(use_colors=False).format(make_record())

    assert "[engine] step 3" in line


def test_setup_logging_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "panel.log"

    setup_logging(level="debug", log_file=log_file)
    logging.getLogger("ledpanel.test").info("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    assert json.loads(log_file.read_text().splitlines()[-1])["message"] == "hello"

    setup_logging()


def test_error_to_dict():
    error = IndexOutOfBoundsError(9, 8)

    assert error.to_dict() == {
        "error_type": "IndexOutOfBoundsError",
        "message": "LED index outside boundaries",
        "severity": "critical",
        "details": {"index": 9, "bound": 8},
    }
    assert str(error) == "LED index outside boundaries (index=9, bound=8)"
