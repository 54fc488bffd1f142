r"""End-to-end tests driving AsyncRetryClient through httpx.MockTransport.

No network access is needed: every request is answered by a scripted
handler, and asyncio.sleep is patched so backoff waits are recorded
instead of awaited.
"""

from __future__ import annotations

import asyncio
import dataclasses
from typing import TYPE_CHECKING

import httpx
import pytest

from retryclient import (
    ApiResponseError,
    NoResponseError,
    RequestDescriptor,
    RetryOverride,
    RetryPolicy,
)
from tests.helpers import ScriptedHandler, make_client

if TYPE_CHECKING:
    from unittest.mock import Mock


def waits(mock_asleep: Mock) -> list[float]:
    return [c.args[0] for c in mock_asleep.call_args_list]


########################################
#     Tests for retry then success     #
########################################


@pytest.mark.asyncio
@pytest.mark.parametrize("failures", [1, 2, 3])
async def test_success_after_transient_failures(failures: int, mock_asleep: Mock) -> None:
    """Test that N failures followed by a success take N + 1 attempts."""
    handler = ScriptedHandler(
        *[httpx.Response(503)] * failures, httpx.Response(200, json={"success": True})
    )
    async with make_client(handler, retry_policy=RetryPolicy(max_retries=3)) as client:
        envelope = await client.get("/data")
    assert envelope.data == {"success": True}
    assert handler.attempts == failures + 1
    assert waits(mock_asleep) == [0.5 * 2**i for i in range(failures)]


@pytest.mark.asyncio
async def test_exhausted_retries_raise_once(mock_asleep: Mock) -> None:
    """Test that a persistent failure takes max_retries + 1 attempts and
    raises a single typed error."""
    handler = ScriptedHandler(httpx.Response(500, json={"message": "Internal Server Error"}))
    policy = RetryPolicy(max_retries=3, backoff_strategy="linear", delay_factor=1.0)
    async with make_client(handler, retry_policy=policy, name="DataApi") as client:
        with pytest.raises(ApiResponseError) as exc_info:
            await client.get("/data")
    assert handler.attempts == 4
    assert waits(mock_asleep) == [1.0, 2.0, 3.0]
    assert exc_info.value.message == "[DataApi] GET /data : [500] Internal Server Error"


@pytest.mark.asyncio
async def test_non_idempotent_request_not_retried_on_server_error(mock_asleep: Mock) -> None:
    handler = ScriptedHandler(httpx.Response(503))
    async with make_client(handler, retry_policy=RetryPolicy(max_retries=3)) as client:
        with pytest.raises(ApiResponseError):
            await client.post("/data", {"value": 1})
    assert handler.attempts == 1
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_non_idempotent_request_retried_on_network_error(mock_asleep: Mock) -> None:
    handler = ScriptedHandler(httpx.ConnectError, httpx.Response(201, json={"id": 7}))
    async with make_client(handler, retry_policy=RetryPolicy(max_retries=1)) as client:
        envelope = await client.post("/data", {"value": 1})
    assert envelope.status_code == 201
    assert handler.json_bodies() == [{"value": 1}, {"value": 1}]


####################################
#     Tests for classification     #
####################################


@pytest.mark.asyncio
async def test_not_found_classification(mock_asleep: Mock) -> None:
    """Test that a 404 is not retried and becomes an ApiResponseError."""
    handler = ScriptedHandler(httpx.Response(404, json={"message": "Not Found"}))
    async with make_client(handler, retry_policy=RetryPolicy(max_retries=3), name="Api") as client:
        with pytest.raises(ApiResponseError) as exc_info:
            await client.get("/users/404")
    error = exc_info.value
    assert error.message == "[Api] GET /users/404 : [404] Not Found"
    assert error.status == 404
    assert error.body == {"message": "Not Found"}
    assert handler.attempts == 1


@pytest.mark.asyncio
async def test_network_drop_classification(mock_asleep: Mock) -> None:
    """Test that a connection dropped on every attempt raises one
    NoResponseError after all retries."""
    handler = ScriptedHandler(httpx.RemoteProtocolError)
    async with make_client(handler, retry_policy=RetryPolicy(max_retries=2), name="Api") as client:
        with pytest.raises(NoResponseError) as exc_info:
            await client.delete("/users/1")
    assert handler.attempts == 3
    assert exc_info.value.message == "[Api] DELETE /users/1 [no response] : scripted failure"
    assert isinstance(exc_info.value.cause, httpx.RemoteProtocolError)


@pytest.mark.asyncio
async def test_timeout_classification(mock_asleep: Mock) -> None:
    handler = ScriptedHandler(httpx.ReadTimeout)
    async with make_client(handler) as client:
        with pytest.raises(NoResponseError):
            await client.get("/slow")
    assert handler.attempts == 1


###########################
#     Tests for hooks     #
###########################


@pytest.mark.asyncio
async def test_filter_changes_reach_transport() -> None:
    """Test that headers and payload set by the filter are what the
    server receives."""

    def sign(request: RequestDescriptor) -> RequestDescriptor:
        headers = {**request.options.get("headers", {}), "X-Signature": "abc123"}
        payload = {**request.payload, "signed": True}
        return dataclasses.replace(
            request, payload=payload, options={**request.options, "headers": headers}
        )

    handler = ScriptedHandler()
    async with make_client(handler, hooks={"pre_request_filter": sign}) as client:
        await client.put("/users/1", {"name": "Ada"})
    assert handler.requests[0].headers["X-Signature"] == "abc123"
    assert handler.json_bodies() == [{"name": "Ada", "signed": True}]


################################################
#     Tests for concurrent retry overrides     #
################################################


@pytest.mark.asyncio
async def test_concurrent_overrides_are_isolated(mock_asleep: Mock) -> None:
    """Test that concurrent requests with different overrides each use
    their own policy."""

    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    handler = ScriptedHandler(respond)
    async with make_client(handler, retry_policy=RetryPolicy(max_retries=1)) as client:
        results = await asyncio.gather(
            client.get("/a", retry=RetryOverride(max_retries=0)),
            client.get("/b", retry=RetryOverride(max_retries=3)),
            client.get("/c"),
            return_exceptions=True,
        )
    assert all(isinstance(result, ApiResponseError) for result in results)
    paths = [request.url.path for request in handler.requests]
    assert paths.count("/a") == 1
    assert paths.count("/b") == 4
    assert paths.count("/c") == 2
    assert client.config.retry_policy == RetryPolicy(max_retries=1)


@pytest.mark.asyncio
async def test_concurrent_requests_share_connection_pool(mock_asleep: Mock) -> None:
    handler = ScriptedHandler()
    async with make_client(handler) as client:
        requests = [RequestDescriptor("GET", "/x", retry={"max_retries": n}) for n in range(3)]
        transports = {client._transport_for(request).transport for request in requests}
        await asyncio.gather(*(client.get(f"/items/{i}") for i in range(5)))
    assert transports == {client.transport}
    assert handler.attempts == 5
