r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before retrying a
    failed request based on the retry attempt number.

    Args:
        delay_factor: The base delay in seconds. Must be > 0.
    """

    def __init__(self, delay_factor: float = 0.5) -> None:
        if delay_factor <= 0:
            msg = f"delay_factor must be > 0, got {delay_factor}"
            raise ValueError(msg)
        self.delay_factor = delay_factor

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay_factor={self.delay_factor})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseBackoffStrategy):
            return NotImplemented
        return type(self) is type(other) and self.delay_factor == other.delay_factor

    def __hash__(self) -> int:
        return hash((type(self), self.delay_factor))

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry attempt.

        Args:
            attempt: The retry attempt number (1-indexed). For example,
                attempt=1 is the first retry, attempt=2 is the second retry, etc.

        Returns:
            The calculated delay in seconds before the retry attempt.

        Raises:
            ValueError: If attempt is lower than 1.
        """
