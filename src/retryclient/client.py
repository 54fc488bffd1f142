r"""Asynchronous API client with retry, lifecycle hooks and typed errors.

This module provides ``AsyncRetryClient``, a reusable base for talking to
a single backend API. Each call runs the pre-request hooks, resolves the
effective retry policy, dispatches through the transport, and turns any
failure into a typed error.
"""

from __future__ import annotations

__all__ = ["AsyncRetryClient", "ResponseEnvelope"]

import logging
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from retryclient.classifier import ErrorClassifier
from retryclient.core.constants import HttpMethod
from retryclient.hooks import RequestDebugLogger, RequestDescriptor, identity_filter, run_hook
from retryclient.retry.policy import resolve_retry_policy
from retryclient.transport import HttpxTransport
from retryclient.utils.debug_logging import LoggingDebugLogger
from retryclient.utils.response import decode_body
from retryclient.utils.structured_logging import (
    log_structured,
    new_request_id,
    reset_request_id,
    set_request_id,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    import httpx

    from retryclient.core.config import ClientConfig
    from retryclient.hooks import PreRequestAction, PreRequestFilter
    from retryclient.retry.policy import RetryOverride, RetryPolicy
    from retryclient.transport import RetryingTransport
    from retryclient.utils.debug_logging import DebugLogger

    RetryArg = RetryOverride | RetryPolicy | Mapping[str, Any] | None

logger: logging.Logger = logging.getLogger(__name__)

# Option key of the older per-request retry configuration
DEPRECATED_RETRY_OPTION = "retry_config"


@dataclass(frozen=True)
class ResponseEnvelope:
    """Result of a successful request.

    Attributes:
        raw_response: The httpx response.
        data: The decoded body: parsed JSON, text, or ``None`` when empty.
    """

    raw_response: httpx.Response
    data: Any

    @property
    def status_code(self) -> int:
        """The status code of the response."""
        return self.raw_response.status_code


def _payload_kwargs(payload: Any) -> dict[str, Any]:
    if payload is None:
        return {}
    if isinstance(payload, (str, bytes)):
        return {"content": payload}
    return {"json": payload}


class AsyncRetryClient:
    r"""Asynchronous client for a single backend API.

    The client owns one ``httpx.AsyncClient``, created at construction with
    the configured base URL and transport options, and one retrying view
    of it carrying the default retry policy. Requests with a retry override
    get their own view of the same connection pool.

    Args:
        config: The client configuration.
        pre_request_filter: Hook that may return a modified request.
            Defaults to ``identity_filter``.
        pre_request_action: Hook run before dispatch for side effects.
            Defaults to a ``RequestDebugLogger``.
        error_handler: Hook turning a transport error into the error to
            raise. Defaults to an ``ErrorClassifier``.
        debug_logger: The logging collaborator used by the default hooks.
            Defaults to a ``LoggingDebugLogger``.
        transport: Optional transport to use instead of creating one.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryclient import AsyncRetryClient, ClientConfig, RetryPolicy
        >>> async def main():  # doctest: +SKIP
        ...     config = ClientConfig(
        ...         base_url="https://api.example.com",
        ...         retry_policy=RetryPolicy(max_retries=3),
        ...     )
        ...     async with AsyncRetryClient(config) as client:
        ...         users = await client.get("/users", params={"page": 1})
        ...         created = await client.post("/users", {"name": "Ada"}, retry={"max_retries": 0})
        ...     return users.data, created.data
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        pre_request_filter: PreRequestFilter | None = None,
        pre_request_action: PreRequestAction | None = None,
        error_handler: Callable[[Exception, RequestDescriptor], Exception] | None = None,
        debug_logger: DebugLogger | None = None,
        transport: HttpxTransport | None = None,
    ) -> None:
        self._config = config
        self._debug_logger = debug_logger if debug_logger is not None else LoggingDebugLogger()
        self._pre_request_filter = (
            pre_request_filter if pre_request_filter is not None else identity_filter
        )
        self._pre_request_action = (
            pre_request_action
            if pre_request_action is not None
            else RequestDebugLogger(config, self._debug_logger)
        )
        self._error_handler = (
            error_handler
            if error_handler is not None
            else ErrorClassifier(config, self._debug_logger)
        )
        self._transport = (
            transport
            if transport is not None
            else HttpxTransport(config.base_url, config.transport_config)
        )
        self._retrying_transport = self._transport.with_retry(config.retry_policy)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(name={self._config.name!r}, "
            f"base_url={self._config.base_url!r})"
        )

    @property
    def config(self) -> ClientConfig:
        """The immutable client configuration."""
        return self._config

    @property
    def transport(self) -> HttpxTransport:
        """The shared single-attempt transport."""
        return self._transport

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self._transport.aclose()

    def _transport_for(self, request: RequestDescriptor) -> RetryingTransport:
        if request.retry is None:
            return self._retrying_transport
        policy = resolve_retry_policy(self._config.retry_policy, request.retry)
        return self._transport.with_retry(policy)

    async def request(
        self,
        method: HttpMethod | str,
        url: str,
        payload: Any = None,
        *,
        retry: RetryArg = None,
        **options: Any,
    ) -> ResponseEnvelope:
        """Send a request through the hooks, the retry policy and the
        transport.

        Args:
            method: The HTTP method.
            url: The URL, absolute or relative to the base URL.
            payload: The request body. Dicts and lists are sent as JSON,
                ``str`` and ``bytes`` as raw content.
            retry: Optional retry override for this request only.
            **options: Keyword arguments for ``httpx.AsyncClient.request``
                (headers, params, timeout, ...).

        Returns:
            The response envelope.

        Raises:
            ApiResponseError: If the server responded with a non-2xx status.
            NoResponseError: If no response was received.
            RequestSetupError: If the request could not be sent.
        """
        if DEPRECATED_RETRY_OPTION in options:
            warnings.warn(
                f"the {DEPRECATED_RETRY_OPTION!r} option is deprecated, use 'retry'",
                DeprecationWarning,
                stacklevel=3,
            )
            legacy = options.pop(DEPRECATED_RETRY_OPTION)
            if retry is None:
                retry = legacy

        request = RequestDescriptor(
            method=method, url=url, payload=payload, options=options, retry=retry
        )
        request = await run_hook(self._pre_request_filter, request)
        await run_hook(self._pre_request_action, request)

        token = set_request_id(new_request_id())
        try:
            try:
                # An invalid override fails here and is classified like any setup error
                transport = self._transport_for(request)
                log_structured(
                    logger,
                    logging.DEBUG,
                    f"[{self._config.name}] {request.method.value} {request.url}",
                    client=self._config.name,
                    http_method=request.method.value,
                    http_url=request.url,
                    max_retries=transport.policy.max_retries,
                )
                response = await transport.request(
                    request.method.value,
                    request.url,
                    **_payload_kwargs(request.payload),
                    **request.options,
                )
            except Exception as exc:
                error = self._error_handler(exc, request)
                if error is exc:
                    raise
                raise error from exc
        finally:
            reset_request_id(token)
        return ResponseEnvelope(raw_response=response, data=decode_body(response))

    async def get(self, url: str, *, retry: RetryArg = None, **options: Any) -> ResponseEnvelope:
        """Send a GET request.

        Args:
            url: The URL, absolute or relative to the base URL.
            retry: Optional retry override for this request only.
            **options: Keyword arguments for ``httpx.AsyncClient.request``.

        Returns:
            The response envelope.
        """
        return await self.request(HttpMethod.GET, url, retry=retry, **options)

    async def post(
        self, url: str, payload: Any = None, *, retry: RetryArg = None, **options: Any
    ) -> ResponseEnvelope:
        """Send a POST request with an optional payload."""
        return await self.request(HttpMethod.POST, url, payload, retry=retry, **options)

    async def put(
        self, url: str, payload: Any = None, *, retry: RetryArg = None, **options: Any
    ) -> ResponseEnvelope:
        """Send a PUT request with an optional payload."""
        return await self.request(HttpMethod.PUT, url, payload, retry=retry, **options)

    async def patch(
        self, url: str, payload: Any = None, *, retry: RetryArg = None, **options: Any
    ) -> ResponseEnvelope:
        """Send a PATCH request with an optional payload."""
        return await self.request(HttpMethod.PATCH, url, payload, retry=retry, **options)

    async def delete(self, url: str, *, retry: RetryArg = None, **options: Any) -> ResponseEnvelope:
        """Send a DELETE request."""
        return await self.request(HttpMethod.DELETE, url, retry=retry, **options)
