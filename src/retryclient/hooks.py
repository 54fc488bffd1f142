r"""Lifecycle hooks run before every request.

Two extension points run once per request, in this order, strictly
before the request is dispatched:

- ``pre_request_filter(request) -> RequestDescriptor`` may return a
  modified request. The default ``identity_filter`` returns it unchanged.
- ``pre_request_action(request) -> None`` performs side effects. The
  default ``RequestDebugLogger`` dumps the request when debug is enabled.

Hooks are plain callables or coroutine functions injected into the
client independently of each other.

Example:
    ```pycon
    >>> import dataclasses
    >>> from retryclient.hooks import RequestDescriptor
    >>> def add_token(request: RequestDescriptor) -> RequestDescriptor:
    ...     headers = {**request.options.get("headers", {}), "Authorization": "Bearer secret"}
    ...     return dataclasses.replace(request, options={**request.options, "headers": headers})
    ...
    >>> request = add_token(RequestDescriptor(method="GET", url="/users"))
    >>> request.options["headers"]
    {'Authorization': 'Bearer secret'}

    ```
"""

from __future__ import annotations

__all__ = [
    "PreRequestAction",
    "PreRequestFilter",
    "RequestDebugLogger",
    "RequestDescriptor",
    "identity_filter",
    "run_hook",
]

import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeVar, Union

from retryclient.core.constants import HttpMethod

if TYPE_CHECKING:
    from retryclient.core.config import ClientConfig
    from retryclient.retry.policy import RetryOverride, RetryPolicy
    from retryclient.utils.debug_logging import DebugLogger

T = TypeVar("T")


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical request, as seen by the lifecycle hooks.

    Attributes:
        method: The HTTP method.
        url: The URL, absolute or relative to the client's base URL.
        payload: The request body, ``None`` for GET and DELETE.
        options: Keyword arguments for ``httpx.AsyncClient.request``
            (headers, params, timeout, ...).
        retry: Optional per-request retry override.
    """

    method: HttpMethod
    url: str
    payload: Any = None
    options: Mapping[str, Any] = field(default_factory=dict)
    retry: RetryOverride | RetryPolicy | Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, HttpMethod):
            object.__setattr__(self, "method", HttpMethod(self.method.upper()))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


PreRequestFilter = Callable[
    [RequestDescriptor], Union[RequestDescriptor, Awaitable[RequestDescriptor]]
]
PreRequestAction = Callable[[RequestDescriptor], Union[None, Awaitable[None]]]


async def run_hook(hook: Callable[..., T | Awaitable[T]], *args: Any) -> T:
    """Call a hook and await its result if it is awaitable.

    Example:
        ```pycon
        >>> import asyncio
        >>> from retryclient.hooks import run_hook
        >>> asyncio.run(run_hook(lambda x: x + 1, 1))
        2

        ```
    """
    result = hook(*args)
    if inspect.isawaitable(result):
        return await result
    return result


def identity_filter(request: RequestDescriptor) -> RequestDescriptor:
    """Default pre-request filter: return the request unchanged."""
    return request


class RequestDebugLogger:
    """Default pre-request action: log the outgoing request.

    When debug is enabled, logs a dump titled ``[name] METHOD url``
    holding the payload, plus the request options in verbose mode.
    Does nothing otherwise.

    Args:
        config: The client configuration.
        debug_logger: The logging collaborator.
    """

    def __init__(self, config: ClientConfig, debug_logger: DebugLogger) -> None:
        self.config = config
        self.debug_logger = debug_logger

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(name={self.config.name!r})"

    def __call__(self, request: RequestDescriptor) -> None:
        if not self.config.debug:
            return
        title = f"[{self.config.name}] {request.method.value} {request.url}"
        if self.config.verbose:
            data = {"payload": request.payload, "options": dict(request.options)}
        else:
            data = {"payload": request.payload}
        self.debug_logger.log_titled_data(title, data)
