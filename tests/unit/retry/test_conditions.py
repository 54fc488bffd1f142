from __future__ import annotations

import httpx
import pytest

from retryclient.retry.conditions import (
    get_error_request,
    get_error_response,
    is_idempotent_request_error,
    is_network_error,
    is_network_or_idempotent_request_error,
    is_retryable_status,
)
from tests.helpers import make_status_error

URL = "https://api.example.com/users"

#########################################
#     Tests for is_retryable_status     #
#########################################


@pytest.mark.parametrize("status_code", [429, 500, 502, 503, 504, 599])
def test_is_retryable_status_true(status_code: int) -> None:
    assert is_retryable_status(status_code)


@pytest.mark.parametrize("status_code", [200, 301, 400, 401, 404, 409, 600])
def test_is_retryable_status_false(status_code: int) -> None:
    assert not is_retryable_status(status_code)


################################################
#     Tests for error request and response     #
################################################


def test_get_error_request_without_request() -> None:
    assert get_error_request(httpx.ConnectError("refused")) is None


def test_get_error_request_with_request() -> None:
    request = httpx.Request("GET", URL)
    assert get_error_request(httpx.ConnectError("refused", request=request)) is request


def test_get_error_request_plain_exception() -> None:
    assert get_error_request(ValueError("bad")) is None


def test_get_error_response() -> None:
    error = make_status_error(500)
    assert get_error_response(error) is error.response


def test_get_error_response_without_response() -> None:
    assert get_error_response(httpx.ConnectError("refused")) is None


######################################
#     Tests for is_network_error     #
######################################


@pytest.mark.parametrize(
    "error_class", [httpx.ConnectError, httpx.ReadError, httpx.ReadTimeout, httpx.RemoteProtocolError]
)
def test_is_network_error_true(error_class: type[httpx.RequestError]) -> None:
    assert is_network_error(error_class("failed", request=httpx.Request("POST", URL)))


def test_is_network_error_false_with_response() -> None:
    assert not is_network_error(make_status_error(503))


def test_is_network_error_false_without_request() -> None:
    assert not is_network_error(TypeError("payload is not JSON serializable"))


#################################################
#     Tests for is_idempotent_request_error     #
#################################################


@pytest.mark.parametrize("method", ["GET", "HEAD", "OPTIONS", "PUT", "DELETE"])
def test_is_idempotent_request_error_idempotent_method(method: str) -> None:
    assert is_idempotent_request_error(make_status_error(503, method=method))


@pytest.mark.parametrize("method", ["POST", "PATCH"])
def test_is_idempotent_request_error_non_idempotent_method(method: str) -> None:
    assert not is_idempotent_request_error(make_status_error(503, method=method))


@pytest.mark.parametrize("status_code", [400, 401, 403, 404, 422])
def test_is_idempotent_request_error_client_error_status(status_code: int) -> None:
    assert not is_idempotent_request_error(make_status_error(status_code))


def test_is_idempotent_request_error_rate_limited() -> None:
    assert is_idempotent_request_error(make_status_error(429))


def test_is_idempotent_request_error_network_error() -> None:
    assert not is_idempotent_request_error(
        httpx.ConnectError("refused", request=httpx.Request("GET", URL))
    )


############################################################
#     Tests for is_network_or_idempotent_request_error     #
############################################################


def test_default_condition_network_error_on_post() -> None:
    error = httpx.ConnectError("refused", request=httpx.Request("POST", URL))
    assert is_network_or_idempotent_request_error(error)


def test_default_condition_server_error_on_get() -> None:
    assert is_network_or_idempotent_request_error(make_status_error(500))


def test_default_condition_server_error_on_post() -> None:
    assert not is_network_or_idempotent_request_error(make_status_error(500, method="POST"))


def test_default_condition_not_found() -> None:
    assert not is_network_or_idempotent_request_error(make_status_error(404))


def test_default_condition_setup_error() -> None:
    assert not is_network_or_idempotent_request_error(httpx.UnsupportedProtocol("ftp"))
