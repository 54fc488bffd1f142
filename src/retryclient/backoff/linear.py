r"""Linear backoff strategy."""

from __future__ import annotations

__all__ = ["LinearBackoff"]

from retryclient.backoff.base import BaseBackoffStrategy
from retryclient.core.validation import validate_attempt


class LinearBackoff(BaseBackoffStrategy):
    """Add ``delay_factor`` seconds to the wait after every failed
    attempt.

    Example:
        ```pycon
        >>> from retryclient.backoff import LinearBackoff
        >>> backoff = LinearBackoff(delay_factor=1.5)
        >>> [backoff.calculate(n) for n in (1, 2, 3)]
        [1.5, 3.0, 4.5]

        ```
    """

    def calculate(self, attempt: int) -> float:
        validate_attempt(attempt)
        return self.delay_factor * attempt
