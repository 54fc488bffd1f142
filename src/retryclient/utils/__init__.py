r"""Utility functions for response decoding and logging.

This package provides helpers to decode and describe httpx responses,
the debug logging collaborator used by the client, and opt-in
structured (JSON) logging.
"""

from __future__ import annotations

__all__ = [
    "DebugLogger",
    "LoggingDebugLogger",
    "StructuredFormatter",
    "decode_body",
    "describe_request",
    "describe_response",
    "log_structured",
    "safe_dumps",
]

from retryclient.utils.debug_logging import DebugLogger, LoggingDebugLogger, safe_dumps
from retryclient.utils.response import decode_body, describe_request, describe_response
from retryclient.utils.structured_logging import StructuredFormatter, log_structured
