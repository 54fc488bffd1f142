r"""Retry policies and their per-request resolution.

A client carries one default ``RetryPolicy``. A request may carry a
``RetryOverride`` (or a plain mapping) whose provided fields replace the
default's for that request only. ``resolve_retry_policy`` performs the
merge and never mutates the default.
"""

from __future__ import annotations

__all__ = ["RetryInfo", "RetryOverride", "RetryPolicy", "resolve_retry_policy"]

import logging
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any

from retryclient.backoff import BackoffType, calculate_delay
from retryclient.core.constants import (
    DEFAULT_BACKOFF_STRATEGY,
    DEFAULT_DELAY_FACTOR,
    DEFAULT_MAX_RETRIES,
)
from retryclient.core.validation import validate_retry_params
from retryclient.retry.conditions import is_network_or_idempotent_request_error

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class _Unset:
    """Type of the default of ``RetryOverride`` fields."""

    def __repr__(self) -> str:
        return "UNSET"


_UNSET = _Unset()

# Keys of the older flat retry configuration, translated when found in a mapping
DEPRECATED_ALIASES = {"retries": "max_retries", "retry_delay": "delay_factor"}


@dataclass
class RetryInfo:
    """Information passed to the on_retry callback.

    Attributes:
        method: The HTTP method (e.g., "GET", "POST").
        url: The URL being requested.
        attempt: The retry attempt about to be made (1-indexed). The first
            retry is attempt 1.
        max_retries: Maximum number of retry attempts configured.
        delay: The wait in seconds before this retry.
        error: The exception that triggered the retry.
    """

    method: str
    url: str
    attempt: int
    max_retries: int
    delay: float
    error: Exception


@dataclass(frozen=True)
class RetryPolicy:
    """Retry behavior of a client or of a single request.

    Args:
        max_retries: Maximum number of retries after the initial attempt.
            Must be >= 0; 0 disables retries.
        backoff_strategy: How the wait grows between retries.
        delay_factor: Base delay in seconds. Must be > 0.
        on_retry: Optional callback invoked before each retry.
        retry_condition: Predicate deciding whether a failed attempt is
            retried. Defaults to retrying network errors and 429/5xx
            responses of idempotent requests.
        max_delay: Optional cap in seconds applied to every wait. ``None``
            means no cap.

    Example:
        ```pycon
        >>> from retryclient.retry import RetryPolicy
        >>> policy = RetryPolicy(max_retries=3, backoff_strategy="linear", delay_factor=1.0)
        >>> policy.delay(2)
        2.0
        >>> RetryPolicy().max_retries
        0

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_strategy: BackoffType = BackoffType(DEFAULT_BACKOFF_STRATEGY)
    delay_factor: float = DEFAULT_DELAY_FACTOR
    on_retry: Callable[[RetryInfo], None] | None = None
    retry_condition: Callable[[Exception], bool] = field(
        default=is_network_or_idempotent_request_error
    )
    max_delay: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_retry_params(
            max_retries=self.max_retries,
            delay_factor=self.delay_factor,
            max_delay=self.max_delay,
        )
        object.__setattr__(self, "backoff_strategy", BackoffType(self.backoff_strategy))

    def delay(self, attempt: int) -> float:
        """Compute the wait before a retry attempt.

        Args:
            attempt: The retry attempt number (1-indexed).

        Returns:
            The backoff delay in seconds, capped at ``max_delay`` if set.
        """
        delay = calculate_delay(attempt, self.backoff_strategy, self.delay_factor)
        if self.max_delay is not None and delay > self.max_delay:
            logger.debug(f"Capping delay from {delay:.2f}s to {self.max_delay:.2f}s")
            delay = self.max_delay
        return delay


@dataclass(frozen=True)
class RetryOverride:
    """Per-request replacement for some fields of the default policy.

    A field left at its default is not provided. Any value given
    explicitly is provided and replaces the default's value, including
    ``0`` for ``max_retries`` and ``None`` for ``max_delay`` or ``on_retry``.

    Example:
        ```pycon
        >>> from retryclient.retry import RetryOverride
        >>> RetryOverride(max_retries=0).provided()
        {'max_retries': 0}
        >>> RetryOverride(max_delay=None).provided()
        {'max_delay': None}

        ```
    """

    max_retries: int | _Unset = _UNSET
    backoff_strategy: BackoffType | str | _Unset = _UNSET
    delay_factor: float | _Unset = _UNSET
    on_retry: Callable[[RetryInfo], None] | None | _Unset = _UNSET
    retry_condition: Callable[[Exception], bool] | _Unset = _UNSET
    max_delay: float | None | _Unset = _UNSET

    def provided(self) -> dict[str, Any]:
        """Return the fields that were explicitly provided."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not _UNSET
        }


_POLICY_FIELDS = frozenset(f.name for f in fields(RetryPolicy))


def _mapping_changes(override: Mapping[str, Any]) -> dict[str, Any]:
    changes = {}
    for key, value in override.items():
        if key in DEPRECATED_ALIASES:
            warnings.warn(
                f"retry override key {key!r} is deprecated, use {DEPRECATED_ALIASES[key]!r}",
                DeprecationWarning,
                stacklevel=4,
            )
            key = DEPRECATED_ALIASES[key]  # noqa: PLW2901
        if key not in _POLICY_FIELDS:
            msg = f"Unknown retry override field {key!r}; expected one of {sorted(_POLICY_FIELDS)}"
            raise ValueError(msg)
        changes[key] = value
    return changes


def resolve_retry_policy(
    default: RetryPolicy,
    override: RetryOverride | RetryPolicy | Mapping[str, Any] | None = None,
) -> RetryPolicy:
    """Merge a default policy with an optional per-request override.

    Args:
        default: The client's default retry policy.
        override: The per-request override. A ``RetryOverride`` provides
            its non-``None`` fields, a mapping provides the keys it
            contains, and a full ``RetryPolicy`` replaces the default.

    Returns:
        ``default`` itself when no override is given, otherwise a new
        policy. The default is never mutated.

    Raises:
        ValueError: If a mapping contains an unknown key or the merged
            policy fails validation.

    Example:
        ```pycon
        >>> from retryclient.retry import RetryOverride, RetryPolicy, resolve_retry_policy
        >>> default = RetryPolicy(max_retries=3, delay_factor=1.0)
        >>> resolve_retry_policy(default) is default
        True
        >>> policy = resolve_retry_policy(default, RetryOverride(max_retries=0))
        >>> policy.max_retries, policy.delay_factor
        (0, 1.0)
        >>> resolve_retry_policy(default, {"backoff_strategy": "none"}).backoff_strategy
        <BackoffType.NONE: 'none'>

        ```
    """
    if override is None:
        return default
    if isinstance(override, RetryPolicy):
        return override
    if isinstance(override, RetryOverride):
        changes = override.provided()
    elif isinstance(override, Mapping):
        changes = _mapping_changes(override)
    else:
        msg = f"Unsupported retry override type: {type(override).__qualname__}"
        raise TypeError(msg)
    return replace(default, **changes)
