r"""Retry policies, retry conditions and the async retry executor.

Public API:
    - RetryPolicy: Retry behavior of a client or a request
    - RetryOverride: Per-request replacement of policy fields
    - resolve_retry_policy: Merge a default policy with an override
    - RetryInfo: Information passed to the on_retry callback
    - AsyncRetryExecutor: Sequential retry loop for async requests
    - is_network_or_idempotent_request_error: Default retry condition
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "RetryInfo",
    "RetryOverride",
    "RetryPolicy",
    "is_network_or_idempotent_request_error",
    "resolve_retry_policy",
]

from retryclient.retry.conditions import is_network_or_idempotent_request_error
from retryclient.retry.executor import AsyncRetryExecutor
from retryclient.retry.policy import RetryInfo, RetryOverride, RetryPolicy, resolve_retry_policy
