r"""Debug output written by the client when ``debug`` is enabled.

The client only needs two operations from its logging collaborator:
``log_titled_data`` to dump a titled block of data and ``log_info_line``
to write one informational line. ``LoggingDebugLogger`` implements them
on top of the standard logging module; any object with the same two
methods can be passed to the client instead.

Example:
    Show the client's debug output on the console:

    ```python
    import logging

    logging.basicConfig(level=logging.INFO)
    ```
"""

from __future__ import annotations

__all__ = ["DebugLogger", "LoggingDebugLogger", "format_error", "safe_dumps"]

import json
import logging
from typing import Any, Protocol, runtime_checkable

DEBUG_LOGGER_NAME = "retryclient.debug"


@runtime_checkable
class DebugLogger(Protocol):
    """Logging collaborator consumed by the client."""

    def log_titled_data(self, title: str, data: Any) -> None:
        """Log a titled dump of data."""

    def log_info_line(self, text: str) -> None:
        """Log one informational line."""


def _default(value: Any) -> Any:
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, BaseException):
        return {"type": type(value).__name__, "message": str(value)}
    if hasattr(value, "keys") and hasattr(value, "__getitem__"):
        return {str(key): value[key] for key in value.keys()}  # noqa: SIM118
    return repr(value)


def _strip_cycles(value: Any, seen: set[int]) -> Any:
    if isinstance(value, (dict, list)):
        if id(value) in seen:
            return "[Circular]"
        seen = seen | {id(value)}
        if isinstance(value, dict):
            return {key: _strip_cycles(item, seen) for key, item in value.items()}
        return [_strip_cycles(item, seen) for item in value]
    return value


def safe_dumps(data: Any, indent: int | None = 2) -> str:
    """Serialize data to JSON without failing on unusual values.

    Circular references are replaced by ``"[Circular]"`` and values that
    JSON cannot encode are replaced by their ``repr``.

    Args:
        data: The data to serialize.
        indent: The indentation of the output.

    Returns:
        The JSON text.

    Example:
        ```pycon
        >>> from retryclient.utils.debug_logging import safe_dumps
        >>> data = {"a": 1}
        >>> data["self"] = data
        >>> safe_dumps(data, indent=None)
        '{"a": 1, "self": "[Circular]"}'

        ```
    """
    return json.dumps(_strip_cycles(data, set()), indent=indent, default=_default)


def format_error(error: BaseException) -> str:
    """Describe an error and its chain of causes on several lines.

    Example:
        ```pycon
        >>> from retryclient.utils.debug_logging import format_error
        >>> try:
        ...     try:
        ...         raise KeyError("id")
        ...     except KeyError as exc:
        ...         raise ValueError("bad payload") from exc
        ... except ValueError as exc:
        ...     print(format_error(exc))
        ...
        ValueError: bad payload
        caused by KeyError: 'id'

        ```
    """
    lines = [f"{type(error).__name__}: {error}"]
    cause = error.__cause__
    while cause is not None:
        lines.append(f"caused by {type(cause).__name__}: {cause}")
        cause = cause.__cause__
    return "\n".join(lines)


class LoggingDebugLogger:
    """Debug logger writing through the standard logging module.

    Args:
        logger: The logger to write to. Defaults to the
            ``retryclient.debug`` logger.
        level: The level of the records. Defaults to ``logging.INFO`` so
            that debug output is visible once the client enables it.

    Example:
        ```pycon
        >>> from retryclient.utils.debug_logging import LoggingDebugLogger
        >>> debug_logger = LoggingDebugLogger()
        >>> debug_logger.log_titled_data("[api] GET /users", {"payload": None})
        >>> debug_logger.log_info_line("[api] GET /users error.message : refused")

        ```
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger if logger is not None else logging.getLogger(DEBUG_LOGGER_NAME)
        self.level = level

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(logger={self.logger.name!r})"

    def log_titled_data(self, title: str, data: Any) -> None:
        """Log a block headed by ``== title ==`` followed by the data.

        Dicts and lists are rendered as indented JSON, other values with
        ``str``. ``None`` data logs the title only.
        """
        if data is None:
            self.logger.log(self.level, f"== {title} ==")
            return
        text = safe_dumps(data) if isinstance(data, (dict, list)) else str(data)
        self.logger.log(self.level, f"== {title} ==\n{text}")

    def log_info_line(self, text: str) -> None:
        """Log one informational line."""
        self.logger.log(self.level, text)

    def log_error(self, error: BaseException, title: str | None = None) -> None:
        """Log an error with its chain of causes at ERROR level."""
        text = format_error(error)
        if title:
            text = f"== {title} ==\n{text}"
        self.logger.error(text)
