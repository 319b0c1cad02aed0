"""Shared utilities."""

from wcstatus.utils._logging import LogFormatType, create_logger, get_null_logger

__all__ = [
    "LogFormatType",
    "create_logger",
    "get_null_logger",
]
