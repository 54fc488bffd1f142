r"""Retry conditions deciding whether a failed attempt is retried.

The default condition resends requests that got no response at all, and
requests to idempotent methods that got a rate-limit or server error
response. Errors raised before a request existed are never retried.
"""

from __future__ import annotations

__all__ = [
    "get_error_request",
    "get_error_response",
    "is_idempotent_request_error",
    "is_network_error",
    "is_network_or_idempotent_request_error",
    "is_retryable_status",
]

from typing import Any

from retryclient.core.constants import IDEMPOTENT_METHODS, RETRY_STATUS_CODES


def get_error_response(error: BaseException) -> Any | None:
    """Return the response attached to a transport error, if any.

    Args:
        error: The exception raised by the transport.

    Returns:
        The ``response`` attribute of the error, or ``None``.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryclient.retry.conditions import get_error_response
        >>> get_error_response(httpx.ConnectError("refused")) is None
        True

        ```
    """
    return getattr(error, "response", None)


def get_error_request(error: BaseException) -> Any | None:
    """Return the outgoing request attached to a transport error, if any.

    ``httpx.RequestError.request`` raises ``RuntimeError`` when the error
    was created without a request, which is reported here as ``None``.

    Args:
        error: The exception raised by the transport.

    Returns:
        The ``request`` attribute of the error, or ``None``.
    """
    try:
        return getattr(error, "request", None)
    except RuntimeError:
        return None


def is_retryable_status(status_code: int) -> bool:
    """Indicate whether a response status is worth retrying.

    Example:
        ```pycon
        >>> from retryclient.retry.conditions import is_retryable_status
        >>> is_retryable_status(503), is_retryable_status(404)
        (True, False)

        ```
    """
    return status_code in RETRY_STATUS_CODES


def is_network_error(error: Exception) -> bool:
    """Indicate whether the request was sent but no response came back.

    Covers connection failures, dropped connections and timeouts.
    """
    return get_error_response(error) is None and get_error_request(error) is not None


def is_idempotent_request_error(error: Exception) -> bool:
    """Indicate whether an idempotent request failed with a retryable
    status."""
    response = get_error_response(error)
    request = get_error_request(error)
    if response is None or request is None:
        return False
    status_code = getattr(response, "status_code", None)
    if status_code is None:
        return False
    return str(request.method).upper() in IDEMPOTENT_METHODS and is_retryable_status(status_code)


def is_network_or_idempotent_request_error(error: Exception) -> bool:
    """Default retry condition.

    Args:
        error: The exception raised by the failed attempt.

    Returns:
        ``True`` for network errors and for 429/5xx responses to
        idempotent requests, ``False`` otherwise.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryclient.retry.conditions import is_network_or_idempotent_request_error
        >>> request = httpx.Request("GET", "https://api.example.com/data")
        >>> is_network_or_idempotent_request_error(httpx.ConnectError("refused", request=request))
        True
        >>> response = httpx.Response(400, request=request)
        >>> error = httpx.HTTPStatusError("bad request", request=request, response=response)
        >>> is_network_or_idempotent_request_error(error)
        False

        ```
    """
    return is_network_error(error) or is_idempotent_request_error(error)
