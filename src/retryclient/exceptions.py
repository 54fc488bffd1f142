r"""Typed errors raised by the client.

Every failed request raises exactly one of ``ApiResponseError``,
``NoResponseError`` or ``RequestSetupError``. All three derive from
``ApiClientError`` and keep the original transport error in ``cause``.
"""

from __future__ import annotations

__all__ = ["ApiClientError", "ApiResponseError", "NoResponseError", "RequestSetupError"]

from typing import Any


class ApiClientError(Exception):
    """Base class of the errors raised by a failed request.

    Args:
        message: Human-readable description of the failure.
        method: The HTTP method of the request.
        url: The URL of the request.
        cause: The original transport-level error.

    Example:
        ```pycon
        >>> from retryclient.exceptions import NoResponseError
        >>> error = NoResponseError("[api] GET /data [no response] : refused", method="GET", url="/data")
        >>> error.message
        '[api] GET /data [no response] : refused'

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = url
        self.cause = cause
        # Keep the exception chain even when the error is raised without ``from``
        self.__cause__ = cause


class ApiResponseError(ApiClientError):
    """The server responded with a non-2xx status.

    Args:
        message: Human-readable description of the failure.
        status: The HTTP status code of the response.
        body: The decoded response body (object for JSON, text otherwise).
        method: The HTTP method of the request.
        url: The URL of the request.
        cause: The original transport-level error.
    """

    def __init__(
        self,
        message: str,
        status: int,
        body: Any,
        *,
        method: str | None = None,
        url: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, method=method, url=url, cause=cause)
        self.status = status
        self.body = body


class NoResponseError(ApiClientError):
    """The request was sent but no response was received.

    Raised for connection failures, dropped connections and timeouts.
    """


class RequestSetupError(ApiClientError):
    """The request failed before it could be sent.

    Typically a caller or configuration mistake, e.g. an invalid URL or
    a payload that cannot be encoded.
    """
