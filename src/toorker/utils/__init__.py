"""Shared utility helpers for Toorker."""

from .asyncio import call_later
from .background import BackgroundTask, run_background
from .errors import (
    ClipboardError,
    ErrorDescriptor,
    ErrorSeverity,
    PortScanError,
    ProcessProviderError,
    ProviderError,
    ToorkerError,
    describe_exception,
)
from .events import EventHook
from .logging import LoggingOptions, configure_logging, get_logger

__all__ = [
    "BackgroundTask",
    "ClipboardError",
    "ErrorDescriptor",
    "ErrorSeverity",
    "EventHook",
    "LoggingOptions",
    "PortScanError",
    "ProcessProviderError",
    "ProviderError",
    "ToorkerError",
    "call_later",
    "configure_logging",
    "describe_exception",
    "get_logger",
    "run_background",
]
