"""Unit tests for logging setup and the JSON formatter."""

import logging
import sys

import orjson
import pytest

from curriculum_engine.utils.logging import setup_logging
from curriculum_engine.utils.structured_logging import JSONFormatter


def make_record(msg="Loaded 3 collection(s)", exc_info=None):
    return logging.LogRecord(
        name="curriculum_engine.loader",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


@pytest.mark.unit
class TestJSONFormatter:
    def test_basic_fields(self):
        formatter = JSONFormatter(extra_fields={"service": "engine"})

        payload = orjson.loads(formatter.format(make_record()))

        assert payload["level"] == "WARNING"
        assert payload["logger"] == "curriculum_engine.loader"
        assert payload["message"] == "Loaded 3 collection(s)"
        assert payload["service"] == "engine"
        assert payload["location"]["line"] == 10

    def test_extra_attributes_included(self):
        record = make_record()
        record.week = 5

        payload = orjson.loads(JSONFormatter(include_timestamp=False).format(record))

        assert payload["week"] == 5
        assert "timestamp" not in payload

    def test_exception_serialized(self):
        try:
            raise ValueError("bad week")
        except ValueError:
            record = make_record(exc_info=sys.exc_info())

        payload = orjson.loads(JSONFormatter().format(record))

        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "bad week"


@pytest.mark.unit
def test_setup_logging_is_idempotent():
    logger = setup_logging("curriculum_engine.test_setup", "DEBUG")
    handlers = list(logger.handlers)

    again = setup_logging("curriculum_engine.test_setup")

    assert again is logger
    assert again.handlers == handlers
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
