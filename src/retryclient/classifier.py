r"""Classification of failed requests into typed errors.

``ErrorClassifier.classify`` inspects the error raised by the transport
and returns exactly one of:

1. ``ApiResponseError`` when the error carries a response with a status.
2. ``NoResponseError`` when it carries an outgoing request but no response.
3. ``RequestSetupError`` when it carries neither.

An error carrying a response without a status code matches none of these
shapes and is returned unchanged. When debug is enabled, each path dumps
the relevant part of the failure. Debug output is best-effort: a failure
while logging is reported through this module's logger and never changes
the returned error.
"""

from __future__ import annotations

__all__ = ["ErrorClassifier"]

import logging
from typing import TYPE_CHECKING, Any

from retryclient.exceptions import ApiResponseError, NoResponseError, RequestSetupError
from retryclient.retry.conditions import get_error_request, get_error_response
from retryclient.utils.response import decode_body, describe_request, describe_response, has_message

if TYPE_CHECKING:
    from retryclient.core.config import ClientConfig
    from retryclient.hooks import RequestDescriptor
    from retryclient.utils.debug_logging import DebugLogger

logger: logging.Logger = logging.getLogger(__name__)


def _method_name(method: Any) -> str:
    return getattr(method, "value", method)


class ErrorClassifier:
    """Turn transport errors into typed client errors.

    Args:
        config: The client configuration (name and debug settings).
        debug_logger: The logging collaborator used for debug dumps.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryclient.classifier import ErrorClassifier
        >>> from retryclient.core.config import ClientConfig
        >>> from retryclient.utils.debug_logging import LoggingDebugLogger
        >>> classifier = ErrorClassifier(
        ...     ClientConfig(base_url="https://api.example.com", name="api"),
        ...     LoggingDebugLogger(),
        ... )
        >>> request = httpx.Request("GET", "https://api.example.com/users/1")
        >>> response = httpx.Response(404, json={"message": "Not Found"}, request=request)
        >>> error = httpx.HTTPStatusError("not found", request=request, response=response)
        >>> classified = classifier.classify(error, "GET", "/users/1")
        >>> classified.message
        '[api] GET /users/1 : [404] Not Found'
        >>> classified.status, classified.body
        (404, {'message': 'Not Found'})

        ```
    """

    def __init__(self, config: ClientConfig, debug_logger: DebugLogger) -> None:
        self.config = config
        self.debug_logger = debug_logger

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(name={self.config.name!r})"

    def __call__(self, error: Exception, request: RequestDescriptor) -> Exception:
        """Classify an error raised while executing a request.

        This is the signature of the client's ``error_handler`` hook.
        """
        return self.classify(error, request.method, request.url, options=request.options)

    def classify(
        self,
        error: Exception,
        method: str,
        url: str,
        options: Any = None,
    ) -> Exception:
        """Classify a transport error.

        Args:
            error: The error raised by the transport.
            method: The HTTP method of the request.
            url: The URL of the request as given by the caller.
            options: The request options, dumped by the no-response path
                in verbose mode.

        Returns:
            The typed error, or ``error`` itself when it matches none of
            the known shapes.
        """
        method = _method_name(method)
        prefix = f"[{self.config.name}] {method} {url}"

        response = get_error_response(error)
        if response is not None:
            return self._classify_response(error, response, method, url, prefix)

        request = get_error_request(error)
        if request is not None:
            self._debug_no_response(prefix, request, options)
            return NoResponseError(
                f"{prefix} [no response] : {error}", method=method, url=url, cause=error
            )

        self._debug_setup_error(prefix, error)
        return RequestSetupError(f"{prefix} : {error}", method=method, url=url, cause=error)

    def _classify_response(
        self, error: Exception, response: Any, method: str, url: str, prefix: str
    ) -> Exception:
        status = getattr(response, "status_code", None)
        if status is None:
            logger.debug(f"{prefix} : response without status code, not classified")
            return error
        body = decode_body(response)
        self._debug_response(prefix, response, body)
        if has_message(body):
            message = f"{prefix} : [{status}] {body['message']}"
        else:
            message = f"{prefix} : [{status}]"
        return ApiResponseError(message, status, body, method=method, url=url, cause=error)

    def _debug_response(self, prefix: str, response: Any, body: Any) -> None:
        if not self.config.debug:
            return
        try:
            if self.config.verbose:
                self.debug_logger.log_titled_data(f"{prefix} : error.response", describe_response(response))
            else:
                self.debug_logger.log_titled_data(f"{prefix} : error.response.body", body)
        except Exception:
            logger.warning(f"{prefix} : failed to log the error response", exc_info=True)

    def _debug_no_response(self, prefix: str, request: Any, options: Any) -> None:
        if not self.config.debug:
            return
        try:
            if self.config.verbose:
                self.debug_logger.log_titled_data(
                    f"{prefix} : error.options", dict(options) if options else {}
                )
            self.debug_logger.log_titled_data(f"{prefix} : error.request", describe_request(request))
        except Exception:
            logger.warning(f"{prefix} : failed to log the outgoing request", exc_info=True)

    def _debug_setup_error(self, prefix: str, error: Exception) -> None:
        if not self.config.debug:
            return
        try:
            if self.config.verbose:
                self.debug_logger.log_titled_data(
                    f"{prefix} : error",
                    {"type": type(error).__name__, "message": str(error), "args": list(error.args)},
                )
            else:
                self.debug_logger.log_info_line(f"{prefix} error.message : {error}")
        except Exception:
            logger.warning(f"{prefix} : failed to log the request setup error", exc_info=True)
