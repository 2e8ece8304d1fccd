"""Domain exceptions and user-facing descriptions of action failures."""

from __future__ import annotations

import asyncio
import errno
import socket
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import httpx
import psutil


class ToorkerError(Exception):
    """Base class for errors raised by Toorker collaborators."""


class ProviderError(ToorkerError):
    """A live system data provider could not produce results."""


class PortScanError(ProviderError):
    pass


class ProcessProviderError(ProviderError):
    def __init__(self, message: str, *, pid: int | None = None) -> None:
        super().__init__(message)
        self.pid = pid


class ClipboardError(ToorkerError):
    pass


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(slots=True)
class ErrorDescriptor:
    headline: str
    detail: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    transient: bool = False
    suggestion: str | None = None


_NETWORK_ERRNOS = frozenset(
    {
        errno.EHOSTUNREACH,
        errno.ENETDOWN,
        errno.ENETUNREACH,
        errno.ECONNREFUSED,
        errno.ECONNRESET,
        errno.ETIMEDOUT,
    }
)

_RETRY_WHEN_STABLE = "Retry once your connection is stable."


@dataclass(frozen=True, slots=True)
class _Rule:
    matches: Callable[[BaseException], bool]
    headline: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    transient: bool = False
    suggestion: str | None = None
    # report the unwrapped cause instead of the raised wrapper
    detail_from_cause: bool = False


def _is(*types: type[BaseException]) -> Callable[[BaseException], bool]:
    return lambda error: isinstance(error, types)


def _is_network_errno(error: BaseException) -> bool:
    return isinstance(error, OSError) and error.errno in _NETWORK_ERRNOS


# first match wins; order matters where types overlap (TimeoutError is an OSError)
_RULES: tuple[_Rule, ...] = (
    _Rule(
        _is(httpx.TimeoutException),
        "The request timed out.",
        ErrorSeverity.WARNING,
        transient=True,
        suggestion="Check your network connection and retry shortly.",
        detail_from_cause=True,
    ),
    _Rule(
        _is(httpx.TransportError),
        "Network issue while contacting a remote service.",
        ErrorSeverity.WARNING,
        transient=True,
        suggestion=_RETRY_WHEN_STABLE,
        detail_from_cause=True,
    ),
    _Rule(
        _is(asyncio.TimeoutError),
        "The action timed out.",
        ErrorSeverity.WARNING,
        transient=True,
        suggestion="Try again in a moment.",
    ),
    _Rule(_is(psutil.NoSuchProcess), "The process has already exited.", ErrorSeverity.INFO),
    _Rule(
        _is(psutil.AccessDenied, PermissionError),
        "Permission denied.",
        suggestion="The target may be protected or owned by another user.",
    ),
    _Rule(
        _is(socket.gaierror),
        "DNS lookup failed.",
        ErrorSeverity.WARNING,
        transient=True,
        suggestion="Verify internet connectivity or DNS configuration.",
        detail_from_cause=True,
    ),
    _Rule(
        _is_network_errno,
        "Network connection issue encountered.",
        ErrorSeverity.WARNING,
        transient=True,
        suggestion=_RETRY_WHEN_STABLE,
        detail_from_cause=True,
    ),
    _Rule(_is(ClipboardError), "The clipboard is unavailable.", ErrorSeverity.WARNING, transient=True),
    _Rule(_is(ProviderError), "System information is unavailable.", ErrorSeverity.WARNING, transient=True),
)


def _detail(error: BaseException) -> str:
    return f"{type(error).__name__}: {error}"


def describe_exception(error: Exception) -> ErrorDescriptor:
    """Classify ``error`` (or the innermost exception it wraps) for display."""

    root = _root_cause(error)
    for rule in _RULES:
        if rule.matches(root):
            return ErrorDescriptor(
                headline=rule.headline,
                detail=_detail(root if rule.detail_from_cause else error),
                severity=rule.severity,
                transient=rule.transient,
                suggestion=rule.suggestion,
            )
    return ErrorDescriptor(headline="Action failed.", detail=_detail(error))


def _root_cause(error: BaseException) -> BaseException:
    current = error
    seen = {id(current)}
    while (inner := current.__cause__ or current.__context__) is not None and id(inner) not in seen:
        seen.add(id(inner))
        current = inner
    return current


__all__ = [
    "ClipboardError",
    "ErrorDescriptor",
    "ErrorSeverity",
    "PortScanError",
    "ProcessProviderError",
    "ProviderError",
    "ToorkerError",
    "describe_exception",
]
