r"""HTTP response and request handling utilities.

This module provides functions to decode response bodies and to turn
httpx requests and responses into plain data for debug logging.
"""

from __future__ import annotations

__all__ = ["decode_body", "describe_request", "describe_response", "has_message"]

import json
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def decode_body(response: httpx.Response) -> Any:
    """Decode the body of a response.

    JSON bodies are parsed, other bodies are returned as text. A body
    that announces JSON but cannot be parsed is returned as text.

    Args:
        response: The HTTP response.

    Returns:
        The parsed JSON value, the body text, or ``None`` for an empty body.

    Example:
        ```pycon
        >>> import httpx
        >>> from retryclient.utils.response import decode_body
        >>> decode_body(httpx.Response(200, json={"id": 1}))
        {'id': 1}
        >>> decode_body(httpx.Response(200, text="ok"))
        'ok'
        >>> decode_body(httpx.Response(204)) is None
        True

        ```
    """
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug(f"Response announced {content_type!r} but is not valid JSON")
    return response.text


def has_message(body: Any) -> bool:
    """Indicate whether a decoded body carries a ``message`` field.

    Example:
        ```pycon
        >>> from retryclient.utils.response import has_message
        >>> has_message({"message": "Not Found"}), has_message({"errors": []}), has_message("x")
        (True, False, False)

        ```
    """
    return isinstance(body, dict) and bool(body.get("message"))


def describe_request(request: httpx.Request) -> dict[str, Any]:
    """Summarize an outgoing request for logging."""
    return {
        "method": request.method,
        "url": str(request.url),
        "headers": dict(request.headers),
    }


def describe_response(response: httpx.Response) -> dict[str, Any]:
    """Summarize a response for logging.

    Args:
        response: The HTTP response.

    Returns:
        Status, reason, headers and decoded body of the response, plus
        the request it answers when available.
    """
    description: dict[str, Any] = {
        "status_code": response.status_code,
        "reason_phrase": response.reason_phrase,
        "headers": dict(response.headers),
        "body": decode_body(response),
    }
    try:
        description["request"] = describe_request(response.request)
    except RuntimeError:
        # httpx raises when the response was built without a request
        pass
    return description
