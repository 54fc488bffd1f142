r"""Constant backoff, selected by the ``none`` backoff type."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from retryclient.backoff.base import BaseBackoffStrategy
from retryclient.core.validation import validate_attempt


class ConstantBackoff(BaseBackoffStrategy):
    """Wait ``delay_factor`` seconds before every retry.

    Example:
        ```pycon
        >>> from retryclient.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay_factor=2.5)
        >>> backoff.calculate(1), backoff.calculate(10)
        (2.5, 2.5)

        ```
    """

    def calculate(self, attempt: int) -> float:
        # The attempt does not change the delay but is still checked
        validate_attempt(attempt)
        return self.delay_factor
