r"""Exponential backoff, the default strategy of a retry policy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from retryclient.backoff.base import BaseBackoffStrategy
from retryclient.core.validation import validate_attempt


class ExponentialBackoff(BaseBackoffStrategy):
    """Double the wait after every failed attempt.

    The n-th retry waits ``delay_factor * 2 ** (n - 1)`` seconds. Growth
    is unbounded; ``RetryPolicy.max_delay`` caps it when needed.

    Args:
        delay_factor: The wait before the first retry, in seconds.

    Example:
        ```pycon
        >>> from retryclient.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(delay_factor=0.5)
        >>> [backoff.calculate(n) for n in (1, 2, 3, 4)]
        [0.5, 1.0, 2.0, 4.0]

        ```
    """

    def calculate(self, attempt: int) -> float:
        validate_attempt(attempt)
        return self.delay_factor * 2 ** (attempt - 1)
