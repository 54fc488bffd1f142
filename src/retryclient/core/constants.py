r"""Default values and enums shared by the request pipeline.

This module has no dependency on the rest of the package so that every
layer (backoff, retry, transport, client) can import it.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_STRATEGY",
    "DEFAULT_CLIENT_NAME",
    "DEFAULT_DELAY_FACTOR",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "IDEMPOTENT_METHODS",
    "RETRY_STATUS_CODES",
    "DebugLevel",
    "HttpMethod",
]

from enum import Enum

# Default timeout in seconds used when transport_config does not set one
DEFAULT_TIMEOUT = 10.0

# Default maximum number of retry attempts
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 0

# Default delay factor in seconds
# With exponential backoff: 1st retry waits 0.5s, 2nd waits 1s, 3rd waits 2s
DEFAULT_DELAY_FACTOR = 0.5

DEFAULT_BACKOFF_STRATEGY = "exponential"

# Name used as prefix in debug output and error messages
DEFAULT_CLIENT_NAME = "AsyncRetryClient"

# HTTP status codes that trigger automatic retry of idempotent requests
# 429: Too Many Requests - Rate limiting
# 5xx: Server errors
RETRY_STATUS_CODES = (429, *range(500, 600))

# Methods that can be resent without changing the outcome on the server
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


class HttpMethod(str, Enum):
    """HTTP methods exposed by the client."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class DebugLevel(str, Enum):
    """Amount of detail written by the debug logger.

    ``normal`` logs request payloads and response bodies, ``verbose``
    also logs request options, full responses and outgoing requests.
    """

    NORMAL = "normal"
    VERBOSE = "verbose"
