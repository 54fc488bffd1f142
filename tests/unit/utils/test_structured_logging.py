from __future__ import annotations

import asyncio
import json
import logging
import sys

import pytest

from retryclient.utils.structured_logging import (
    StructuredFormatter,
    get_request_id,
    log_structured,
    new_request_id,
    reset_request_id,
    set_request_id,
)


def make_record(message: str = "Request sent", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="retryclient.client",
        level=logging.INFO,
        pathname="client.py",
        lineno=42,
        msg=message,
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


################################
#     Tests for request id     #
################################


def test_new_request_id() -> None:
    request_id = new_request_id()
    assert len(request_id) == 12
    assert request_id != new_request_id()


def test_set_and_reset_request_id() -> None:
    assert get_request_id() is None
    token = set_request_id("req-1")
    assert get_request_id() == "req-1"
    reset_request_id(token)
    assert get_request_id() is None


@pytest.mark.asyncio
async def test_request_id_is_isolated_between_tasks() -> None:
    async def run(request_id: str) -> str | None:
        token = set_request_id(request_id)
        try:
            await asyncio.sleep(0)
            return get_request_id()
        finally:
            reset_request_id(token)

    assert await asyncio.gather(run("a"), run("b")) == ["a", "b"]


#########################################
#     Tests for StructuredFormatter     #
#########################################


def test_structured_formatter_standard_fields() -> None:
    data = json.loads(StructuredFormatter().format(make_record()))
    assert data["level"] == "INFO"
    assert data["logger"] == "retryclient.client"
    assert data["message"] == "Request sent"
    assert data["line"] == 42
    assert data["timestamp"].endswith("Z")
    assert "request_id" not in data


def test_structured_formatter_extra_fields() -> None:
    data = json.loads(StructuredFormatter().format(make_record(client="api", max_retries=3)))
    assert data["client"] == "api"
    assert data["max_retries"] == 3


def test_structured_formatter_request_id() -> None:
    token = set_request_id("req-42")
    try:
        data = json.loads(StructuredFormatter().format(make_record()))
    finally:
        reset_request_id(token)
    assert data["request_id"] == "req-42"


def test_structured_formatter_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = make_record()
        record.exc_info = sys.exc_info()
    data = json.loads(StructuredFormatter().format(record))
    assert "ValueError: boom" in data["exception"]


def test_structured_formatter_non_serializable_extra() -> None:
    data = json.loads(StructuredFormatter().format(make_record(error=ValueError("bad"))))
    assert data["error"] == repr(ValueError("bad"))


####################################
#     Tests for log_structured     #
####################################


def test_log_structured(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.structured")
    with caplog.at_level(logging.DEBUG, logger="tests.structured"):
        log_structured(logger, logging.DEBUG, "Request completed", status_code=200)
    record = caplog.records[0]
    assert record.getMessage() == "Request completed"
    assert record.status_code == 200
