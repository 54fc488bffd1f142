r"""Structured logging utilities for machine-readable log output.

This module provides a JSON formatter with consistent field names and a
request identifier stored in a context variable. The client tags each
request with an identifier, so every record written while the request
runs (retries included) can be correlated in log aggregation systems.

The structured logging system is opt-in and can be enabled by configuring
Python's logging system to use the provided formatter.

Example:
    Enable structured logging for retryclient:

    ```python
    import logging
    from retryclient.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("retryclient")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "get_request_id",
    "log_structured",
    "new_request_id",
    "reset_request_id",
    "set_request_id",
]

import contextvars
import json
import logging
import time
import uuid
from typing import Any

# Identifier of the request running in the current task
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "retryclient_request_id", default=None
)

# Attributes of every LogRecord, excluded from the extra fields
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


def new_request_id() -> str:
    """Generate a short random request identifier."""
    return uuid.uuid4().hex[:12]


def get_request_id() -> str | None:
    """Get the identifier of the request running in the current context.

    Example:
        ```pycon
        >>> from retryclient.utils.structured_logging import get_request_id
        >>> get_request_id() is None
        True

        ```
    """
    return _request_id.get()


def set_request_id(request_id: str | None) -> contextvars.Token[str | None]:
    """Set the request identifier for the current context.

    The identifier is stored in a context variable, so concurrent
    requests running in different tasks never see each other's value.

    Args:
        request_id: The identifier, or ``None`` to clear it.

    Returns:
        A token to restore the previous value with ``reset_request_id``.

    Example:
        ```pycon
        >>> from retryclient.utils.structured_logging import (
        ...     get_request_id,
        ...     reset_request_id,
        ...     set_request_id,
        ... )
        >>> token = set_request_id("req-123")
        >>> get_request_id()
        'req-123'
        >>> reset_request_id(token)
        >>> get_request_id() is None
        True

        ```
    """
    return _request_id.set(request_id)


def reset_request_id(token: contextvars.Token[str | None]) -> None:
    """Restore the request identifier that was active before
    ``set_request_id``."""
    _request_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Standard fields in the JSON output:
        - timestamp: ISO 8601 timestamp
        - level: Log level name
        - logger: Logger name
        - message: Log message
        - request_id: Identifier of the running request, if any
        - module, function, line: Origin of the record

    Any additional fields added via the ``extra`` parameter of logging
    calls are included in the JSON output.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from retryclient.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("test_structured_formatter")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Request sent", extra={"client": "api"})
        >>> '"client": "api"' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = get_request_id()
        if request_id is not None:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format timestamp as ISO 8601 with millisecond precision.

        Args:
            record: The log record.
            datefmt: Ignored, the output is always ISO 8601.

        Returns:
            ISO 8601 formatted timestamp.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with structured data.

    The extra fields are included in the JSON output when using
    ``StructuredFormatter``.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **extra: Additional structured fields to include in the log.

    Example:
        ```pycon
        >>> import logging
        >>> from retryclient.utils.structured_logging import log_structured
        >>> logger = logging.getLogger("test_log_structured")
        >>> log_structured(logger, logging.DEBUG, "Request completed", status_code=200)

        ```
    """
    logger.log(level, message, extra=extra)
