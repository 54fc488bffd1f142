r"""Transport adapter around httpx.AsyncClient.

``HttpxTransport`` sends one request and raises on any non-2xx status,
so that every failure surfaces as an exception exposing an optional
``response``, an optional ``request`` and a message. ``with_retry``
returns a ``RetryingTransport``: a view of the same httpx client whose
calls go through an ``AsyncRetryExecutor`` configured with a policy.
Views share the connection pool of the transport they come from.
"""

from __future__ import annotations

__all__ = ["HttpxTransport", "RetryingTransport"]

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx

from retryclient.core.constants import DEFAULT_TIMEOUT
from retryclient.core.validation import validate_base_url, validate_transport_config
from retryclient.retry.executor import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Mapping

    from retryclient.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class _VerbMethods(ABC):
    """Verb shortcuts delegating to ``request``."""

    @abstractmethod
    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one logical request."""

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)


class HttpxTransport(_VerbMethods):
    """Single-attempt transport backed by an ``httpx.AsyncClient``.

    Args:
        base_url: Base URL request URLs are resolved against.
        transport_config: Keyword arguments for ``httpx.AsyncClient``.
            A 10 second timeout is used unless ``timeout`` is given.
        client: Optional existing httpx client. When given, base_url and
            transport_config are ignored and the caller keeps ownership.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryclient.transport import HttpxTransport
        >>> async def main():  # doctest: +SKIP
        ...     transport = HttpxTransport("https://api.example.com")
        ...     try:
        ...         response = await transport.get("/data")
        ...     finally:
        ...         await transport.aclose()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        base_url: str,
        transport_config: Mapping[str, Any] | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if client is None:
            transport_config = transport_config or {}
            validate_base_url(base_url)
            validate_transport_config(transport_config)
            client = httpx.AsyncClient(
                **{"timeout": DEFAULT_TIMEOUT, **transport_config}, base_url=base_url
            )
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base_url={str(self._client.base_url)!r})"

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying httpx client."""
        return self._client

    @property
    def is_closed(self) -> bool:
        """Whether the underlying httpx client is closed."""
        return self._client.is_closed

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request.

        Args:
            method: The HTTP method.
            url: The URL, absolute or relative to the base URL.
            **kwargs: Keyword arguments for ``httpx.AsyncClient.request``.

        Returns:
            The response, if its status is 2xx.

        Raises:
            httpx.HTTPStatusError: If the response status is not 2xx.
            httpx.RequestError: If no response was received.
        """
        response = await self._client.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    def with_retry(self, policy: RetryPolicy) -> RetryingTransport:
        """Return a view of this transport that retries with a policy."""
        return RetryingTransport(self, policy)

    async def aclose(self) -> None:
        """Close the underlying httpx client if this transport created
        it."""
        if self._owns_client:
            await self._client.aclose()


class RetryingTransport(_VerbMethods):
    """Transport view applying a retry policy to every call.

    Args:
        transport: The single-attempt transport used for each attempt.
        policy: The retry policy.
    """

    def __init__(self, transport: HttpxTransport, policy: RetryPolicy) -> None:
        self.transport = transport
        self.policy = policy
        self._executor = AsyncRetryExecutor(policy)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(transport={self.transport!r}, policy={self.policy!r})"

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request, retrying failed attempts according to the
        policy.

        Raises:
            Exception: The error of the last attempt, unchanged.
        """
        return await self._executor.execute(method, url, self.transport.request, **kwargs)

    def with_retry(self, policy: RetryPolicy) -> RetryingTransport:
        """Return a view of the same transport with another policy."""
        return RetryingTransport(self.transport, policy)
