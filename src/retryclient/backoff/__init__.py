r"""Backoff strategies and utilities for retry delays.

This package provides the exponential, linear and constant backoff
strategies, and the ``calculate_delay`` helper used by retry policies.
"""

from __future__ import annotations

__all__ = [
    "BackoffType",
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "LinearBackoff",
    "calculate_delay",
    "get_backoff_strategy",
]

from retryclient.backoff.base import BaseBackoffStrategy
from retryclient.backoff.calculator import BackoffType, calculate_delay, get_backoff_strategy
from retryclient.backoff.constant import ConstantBackoff
from retryclient.backoff.exponential import ExponentialBackoff
from retryclient.backoff.linear import LinearBackoff
