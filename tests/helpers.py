r"""Shared test helpers for client and transport tests.

This module contains the infrastructure used to drive an
``AsyncRetryClient`` through ``httpx.MockTransport`` without network
access.
"""

from __future__ import annotations

__all__ = [
    "BASE_URL",
    "ScriptedHandler",
    "make_client",
    "make_status_error",
]

import json
from typing import TYPE_CHECKING, Any

import httpx

from retryclient import AsyncRetryClient, ClientConfig

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://api.example.com"


class ScriptedHandler:
    """MockTransport handler replaying a script of outcomes.

    Each outcome is an ``httpx.Response``, an exception class or instance
    to raise, or a callable receiving the request. The last outcome is
    repeated once the script is exhausted. Every request is recorded.

    Args:
        outcomes: The outcomes, in order.
    """

    def __init__(self, *outcomes: Any) -> None:
        if not outcomes:
            outcomes = (httpx.Response(200, json={"success": True}),)
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    @property
    def attempts(self) -> int:
        return len(self.requests)

    def json_bodies(self) -> list[Any]:
        return [json.loads(request.content) if request.content else None for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes[min(len(self.requests), len(self.outcomes)) - 1]
        if isinstance(outcome, type) and issubclass(outcome, httpx.RequestError):
            raise outcome("scripted failure", request=request)
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome) and not isinstance(outcome, httpx.Response):
            return outcome(request)
        return httpx.Response(
            outcome.status_code,
            headers=outcome.headers,
            content=outcome.content,
        )


def make_client(
    handler: Callable[[httpx.Request], httpx.Response],
    **kwargs: Any,
) -> AsyncRetryClient:
    """Create a client sending requests to a MockTransport handler.

    Args:
        handler: The MockTransport handler.
        **kwargs: ClientConfig fields, plus ``hooks`` for the client
            keyword arguments.
    """
    hooks = kwargs.pop("hooks", {})
    transport_config = {"transport": httpx.MockTransport(handler), **kwargs.pop("transport_config", {})}
    config = ClientConfig(base_url=BASE_URL, transport_config=transport_config, **kwargs)
    return AsyncRetryClient(config, **hooks)


def make_status_error(
    status_code: int,
    method: str = "GET",
    url: str = f"{BASE_URL}/users",
    **response_kwargs: Any,
) -> httpx.HTTPStatusError:
    """Create the error httpx raises for a non-2xx response."""
    request = httpx.Request(method, url)
    response = httpx.Response(status_code, request=request, **response_kwargs)
    return httpx.HTTPStatusError(f"status {status_code}", request=request, response=response)
