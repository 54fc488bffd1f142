r"""Asynchronous retry executor for HTTP requests.

This module provides the AsyncRetryExecutor class that resends a failed
async HTTP request according to a retry policy.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from retryclient.retry.policy import RetryInfo

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from retryclient.retry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes async HTTP requests with automatic retry logic.

    Attempts are sequential: each retry awaits the previous attempt's
    failure and the backoff delay computed by the policy. The executor
    never retries more than ``policy.max_retries`` times and re-raises
    the last error unchanged once it gives up.

    Attributes:
        policy: The retry policy applied to every execution.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from retryclient.retry import AsyncRetryExecutor, RetryPolicy
        >>> async def main():
        ...     executor = AsyncRetryExecutor(RetryPolicy(max_retries=3))
        ...     async with httpx.AsyncClient() as client:
        ...         return await executor.execute(
        ...             method="GET",
        ...             url="https://api.example.com/data",
        ...             send=client.request,
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy!r})"

    async def execute(
        self,
        method: str,
        url: str,
        send: Callable[..., Awaitable[httpx.Response]],
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute an async request with automatic retry logic.

        Attempts the request up to max_retries + 1 times. After a failed
        attempt the error is retried only if retries remain and the
        policy's ``retry_condition`` accepts it.

        Args:
            method: The HTTP method name (e.g., "GET", "POST").
            url: The URL to request.
            send: Async function performing one attempt. It is called as
                ``send(method, url, **kwargs)`` and raises on failure.
            **kwargs: Additional keyword arguments passed to send.

        Returns:
            The response of the first successful attempt.

        Raises:
            Exception: The error of the last attempt, unchanged.
        """
        max_retries = self.policy.max_retries
        attempt = 0
        while True:
            try:
                return await send(method, url, **kwargs)
            except Exception as exc:
                if attempt >= max_retries:
                    logger.debug(
                        f"{method} request to {url} failed after {attempt + 1} attempts: {exc!r}"
                    )
                    raise
                if not self.policy.retry_condition(exc):
                    logger.debug(f"{method} request to {url} failed with non-retryable {exc!r}")
                    raise
                attempt += 1
                delay = self.policy.delay(attempt)
                logger.debug(
                    f"{method} request to {url} failed ({type(exc).__name__}), "
                    f"retry {attempt}/{max_retries} in {delay:.2f}s"
                )
                if self.policy.on_retry is not None:
                    self.policy.on_retry(
                        RetryInfo(
                            method=method,
                            url=url,
                            attempt=attempt,
                            max_retries=max_retries,
                            delay=delay,
                            error=exc,
                        )
                    )
                await asyncio.sleep(delay)
