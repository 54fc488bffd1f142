r"""Backoff type selection and delay calculation.

This module maps the named backoff types used in retry policies onto
the strategy classes, and exposes ``calculate_delay`` as the single
entry point used by the retry executor.
"""

from __future__ import annotations

__all__ = ["BackoffType", "calculate_delay", "get_backoff_strategy"]

from enum import Enum
from typing import TYPE_CHECKING

from retryclient.backoff.constant import ConstantBackoff
from retryclient.backoff.exponential import ExponentialBackoff
from retryclient.backoff.linear import LinearBackoff

if TYPE_CHECKING:
    from retryclient.backoff.base import BaseBackoffStrategy


class BackoffType(str, Enum):
    """Named backoff strategies accepted by a retry policy."""

    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    NONE = "none"


_STRATEGIES: dict[BackoffType, type[BaseBackoffStrategy]] = {
    BackoffType.EXPONENTIAL: ExponentialBackoff,
    BackoffType.LINEAR: LinearBackoff,
    BackoffType.NONE: ConstantBackoff,
}


def get_backoff_strategy(kind: BackoffType | str, delay_factor: float) -> BaseBackoffStrategy:
    """Instantiate the backoff strategy for a backoff type.

    Args:
        kind: The backoff type, as an enum member or its string value.
        delay_factor: The base delay in seconds.

    Returns:
        The backoff strategy instance.

    Raises:
        ValueError: If kind is not a known backoff type or delay_factor
            is not positive.

    Example:
        ```pycon
        >>> from retryclient.backoff import get_backoff_strategy
        >>> get_backoff_strategy("linear", 0.5)
        LinearBackoff(delay_factor=0.5)

        ```
    """
    return _STRATEGIES[BackoffType(kind)](delay_factor)


def calculate_delay(attempt: int, strategy: BackoffType | str, delay_factor: float) -> float:
    """Calculate the wait before a retry attempt.

    The calculation is deterministic and has no implicit ceiling.

    Args:
        attempt: The retry attempt number (1-indexed).
        strategy: The backoff type.
        delay_factor: The base delay in seconds.

    Returns:
        The delay in seconds.

    Raises:
        ValueError: If attempt is lower than 1.

    Example:
        ```pycon
        >>> from retryclient.backoff import calculate_delay
        >>> calculate_delay(3, "exponential", 0.5)
        2.0
        >>> calculate_delay(3, "linear", 0.5)
        1.5
        >>> calculate_delay(3, "none", 0.5)
        0.5

        ```
    """
    return get_backoff_strategy(strategy, delay_factor).calculate(attempt)
