r"""Core shared logic for the request pipeline.

This package contains the defaults, validation helpers and the client
configuration dataclass. ``ClientConfig`` lives in
``retryclient.core.config``; it is not re-exported here because it
depends on the retry package, which itself depends on this package.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CLIENT_NAME",
    "DEFAULT_DELAY_FACTOR",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "IDEMPOTENT_METHODS",
    "RETRY_STATUS_CODES",
    "DebugLevel",
    "HttpMethod",
    "validate_attempt",
    "validate_retry_params",
]

from retryclient.core.constants import (
    DEFAULT_CLIENT_NAME,
    DEFAULT_DELAY_FACTOR,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    IDEMPOTENT_METHODS,
    RETRY_STATUS_CODES,
    DebugLevel,
    HttpMethod,
)
from retryclient.core.validation import validate_attempt, validate_retry_params
