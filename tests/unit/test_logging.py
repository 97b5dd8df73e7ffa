import json
import logging

import pytest

from dbplayground.core.logging import JSONFormatter, RequestContextFilter, request_id_var

pytestmark = pytest.mark.unit

MIDDLEWARE_LOGGER = "dbplayground.interfaces.http.middleware.logging"


def make_record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("dbplayground.test", logging.INFO, __file__, 10, message, None, None)


def test_json_formatter_includes_request_id():
    record = make_record()
    token = request_id_var.set("req-1")
    try:
        RequestContextFilter().filter(record)
    finally:
        request_id_var.reset(token)

    entry = json.loads(JSONFormatter().format(record))

    assert entry["message"] == "hello"
    assert entry["level"] == "INFO"
    assert entry["request_id"] == "req-1"


def test_json_formatter_without_request():
    record = make_record()
    RequestContextFilter().filter(record)

    assert "request_id" not in json.loads(JSONFormatter().format(record))


def test_response_log_carries_request_id(client, caplog):
    caplog.handler.addFilter(RequestContextFilter())
    caplog.set_level(logging.INFO, logger=MIDDLEWARE_LOGGER)

    client.post("/db/query", json={"query": "SELECT 1"}, headers={"X-Request-ID": "req-7"})

    records = {
        record.getMessage().split(":", 1)[0]: record
        for record in caplog.records
        if record.name == MIDDLEWARE_LOGGER
    }
    assert getattr(records["REQUEST"], "request_id", None) == "req-7"
    assert getattr(records["RESPONSE"], "request_id", None) == "req-7"
