r"""Configuration dataclass and defaults for AsyncRetryClient.

This module provides configuration constants, the enums shared by the
request pipeline, and the dataclass-based configuration object of the
``AsyncRetryClient`` class.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CLIENT_NAME",
    "DEFAULT_DELAY_FACTOR",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "IDEMPOTENT_METHODS",
    "RETRY_STATUS_CODES",
    "ClientConfig",
    "DebugLevel",
    "HttpMethod",
]

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

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
from retryclient.core.validation import validate_base_url, validate_transport_config
from retryclient.retry.policy import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for an AsyncRetryClient.

    The configuration is created once and is immutable for the lifetime
    of the client.

    Args:
        base_url: Base URL of the API. Request URLs are resolved against it.
        transport_config: Keyword arguments passed to ``httpx.AsyncClient``
            (headers, timeout, auth, transport, ...). Must not contain
            ``base_url``.
        retry_policy: Default retry policy applied to every request.
        debug: Whether to log request and error details.
        debug_level: Amount of detail to log when debug is enabled.
        name: Name of the client, used as prefix in logs and error messages.

    Example:
        ```pycon
        >>> from retryclient.core.config import ClientConfig
        >>> from retryclient.retry import RetryPolicy
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config.retry_policy.max_retries
        0
        >>> config = ClientConfig(
        ...     base_url="https://api.example.com",
        ...     retry_policy=RetryPolicy(max_retries=3),
        ...     debug=True,
        ...     debug_level="verbose",
        ... )
        >>> config.debug_level
        <DebugLevel.VERBOSE: 'verbose'>

        ```
    """

    base_url: str
    transport_config: Mapping[str, Any] = field(default_factory=dict)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    debug: bool = False
    debug_level: DebugLevel = DebugLevel.NORMAL
    name: str = DEFAULT_CLIENT_NAME

    def __post_init__(self) -> None:
        """Validate and normalize configuration parameters.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_base_url(self.base_url)
        validate_transport_config(self.transport_config)
        # Frozen dataclass: normalized values are written through object.__setattr__
        object.__setattr__(self, "transport_config", MappingProxyType(dict(self.transport_config)))
        object.__setattr__(self, "debug_level", DebugLevel(self.debug_level))

    @property
    def verbose(self) -> bool:
        """Whether verbose debug output is enabled."""
        return self.debug and self.debug_level is DebugLevel.VERBOSE
