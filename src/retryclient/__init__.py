r"""retryclient - Async API client with retry, lifecycle hooks and typed errors.

This package provides a reusable base for talking to a single backend
API over httpx: configurable retry with exponential, linear or constant
backoff, per-request retry overrides, pre-request hooks, and failures
classified into a closed set of typed errors.

Key Features:
    - Client-wide default retry policy with per-request overrides
    - Exponential, linear and constant backoff
    - ``ApiResponseError``, ``NoResponseError`` and ``RequestSetupError``
      keeping the original transport error as cause
    - Pre-request filter and action hooks, injected independently
    - Debug dumps of requests and failures through the logging module

Example:
    ```pycon
    >>> import asyncio
    >>> from retryclient import AsyncRetryClient, ClientConfig, RetryPolicy
    >>> async def main():  # doctest: +SKIP
    ...     config = ClientConfig(
    ...         base_url="https://api.example.com",
    ...         retry_policy=RetryPolicy(max_retries=3, backoff_strategy="linear"),
    ...         name="ExampleApi",
    ...     )
    ...     async with AsyncRetryClient(config) as client:
    ...         envelope = await client.get("/data")
    ...     return envelope.data
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiClientError",
    "ApiResponseError",
    "AsyncRetryClient",
    "BackoffType",
    "ClientConfig",
    "DebugLevel",
    "HttpMethod",
    "NoResponseError",
    "RequestDescriptor",
    "RequestSetupError",
    "ResponseEnvelope",
    "RetryInfo",
    "RetryOverride",
    "RetryPolicy",
    "__version__",
    "resolve_retry_policy",
]

from importlib.metadata import PackageNotFoundError, version

from retryclient.backoff import BackoffType
from retryclient.client import AsyncRetryClient, ResponseEnvelope
from retryclient.core.config import ClientConfig
from retryclient.core.constants import DebugLevel, HttpMethod
from retryclient.exceptions import (
    ApiClientError,
    ApiResponseError,
    NoResponseError,
    RequestSetupError,
)
from retryclient.hooks import RequestDescriptor
from retryclient.retry import RetryInfo, RetryOverride, RetryPolicy, resolve_retry_policy

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
