r"""Parameter validation utilities for client and retry configuration.

This module provides validation functions for configuration values to
ensure they meet the required constraints before being used by the
request pipeline.
"""

from __future__ import annotations

__all__ = [
    "validate_attempt",
    "validate_base_url",
    "validate_retry_params",
    "validate_transport_config",
]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


def validate_attempt(attempt: int) -> None:
    """Validate a retry attempt number.

    Args:
        attempt: The retry attempt number. Attempts are 1-indexed, so
            the first retry is attempt 1.

    Raises:
        ValueError: If attempt is lower than 1.

    Example:
        ```pycon
        >>> from retryclient.core.validation import validate_attempt
        >>> validate_attempt(1)
        >>> validate_attempt(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: attempt must be >= 1, got 0

        ```
    """
    if attempt < 1:
        msg = f"attempt must be >= 1, got {attempt}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int,
    delay_factor: float,
    max_delay: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts for failed requests.
            Must be >= 0. A value of 0 means no retries (only the initial attempt).
        delay_factor: Base delay in seconds used by the backoff strategy.
            Must be > 0.
        max_delay: Optional cap in seconds applied to every backoff delay.
            Must be > 0 if provided.

    Raises:
        ValueError: If max_retries is negative, or if delay_factor or
            max_delay are non-positive.

    Example:
        ```pycon
        >>> from retryclient.core.validation import validate_retry_params
        >>> validate_retry_params(max_retries=3, delay_factor=0.5)
        >>> validate_retry_params(max_retries=0, delay_factor=0.1, max_delay=5.0)
        >>> validate_retry_params(max_retries=-1, delay_factor=0.5)  # doctest: +SKIP

        ```
    """
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        msg = f"max_retries must be an integer, got {max_retries!r}"
        raise TypeError(msg)
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if delay_factor <= 0:
        msg = f"delay_factor must be > 0, got {delay_factor}"
        raise ValueError(msg)
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be > 0, got {max_delay}"
        raise ValueError(msg)


def validate_base_url(base_url: str) -> None:
    """Validate the base URL of a client.

    Args:
        base_url: The base URL every request path is resolved against.

    Raises:
        ValueError: If base_url is empty.
    """
    if not isinstance(base_url, str) or not base_url:
        msg = f"base_url must be a non-empty string, got {base_url!r}"
        raise ValueError(msg)


def validate_transport_config(transport_config: Mapping[str, Any]) -> None:
    """Validate the options forwarded to the underlying httpx client.

    Args:
        transport_config: Keyword arguments for ``httpx.AsyncClient``.

    Raises:
        ValueError: If transport_config sets ``base_url``, which is owned
            by the client configuration.
    """
    if "base_url" in transport_config:
        msg = "transport_config must not contain 'base_url'; set ClientConfig.base_url instead"
        raise ValueError(msg)
