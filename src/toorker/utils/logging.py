"""structlog front-end rendered through loguru sinks.

Modules call ``get_logger(__name__)`` and log structured key/value pairs; the
final structlog processor hands each event to loguru, which owns the console
and rotating file sinks.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, cast

import structlog
from loguru import logger as loguru_logger
from structlog.exceptions import DropEvent
from structlog.stdlib import BoundLogger
from structlog.typing import EventDict, WrappedLogger

from toorker.config.settings import log_dir

if TYPE_CHECKING:
    from toorker.config.settings import Settings


CONSOLE_FORMAT = "<green>{time:HH:mm:ss.SSS}</green> <level>{level: <7}</level> <cyan>{extra[component]}</cyan> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[component]} | {message} | {extra}"
DEFAULT_LOG_FILENAME = "toorker.log"
_PACKAGE_PREFIX = "toorker."


@dataclass(slots=True)
class LoggingOptions:
    level: str = "INFO"
    debug: bool = False
    rotation: str = "10 MB"
    retention: str = "14 days"
    log_path: Optional[Path] = None
    file_sink: bool = True

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LoggingOptions":
        return cls(level=settings.log_level, debug=settings.debug)

    @property
    def console_level(self) -> str:
        return "DEBUG" if self.debug else self.level.upper()


_is_configured = False


def configure_logging(options: LoggingOptions | None = None) -> Path | None:
    """(Re)install the loguru sinks and structlog pipeline; returns the log file path."""

    global _is_configured

    opts = options or LoggingOptions()
    loguru_logger.remove()
    loguru_logger.configure(extra={"component": "toorker"})
    loguru_logger.add(
        sys.stderr,
        level=opts.console_level,
        colorize=True,
        backtrace=opts.debug,
        diagnose=opts.debug,
        format=CONSOLE_FORMAT,
    )

    log_path: Path | None = None
    if opts.file_sink:
        log_path = opts.log_path or (log_dir() / DEFAULT_LOG_FILENAME)
        loguru_logger.add(
            log_path,
            level="DEBUG",
            rotation=opts.rotation,
            retention=opts.retention,
            enqueue=True,
            encoding="utf-8",
            format=FILE_FORMAT,
        )

    threshold = logging.getLevelName(opts.console_level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _forward_to_loguru,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            threshold if isinstance(threshold, int) else logging.INFO
        ),
        cache_logger_on_first_use=True,
    )

    _is_configured = True
    return log_path


def _component(logger_name: object) -> str:
    name = str(logger_name or "toorker")
    return name[len(_PACKAGE_PREFIX) :] if name.startswith(_PACKAGE_PREFIX) else name


def _forward_to_loguru(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    level = str(event_dict.pop("level", "info")).upper()
    message = event_dict.pop("event", "")
    event_dict.pop("timestamp", None)
    traceback = event_dict.pop("exception", None)
    component = _component(event_dict.pop("logger_name", None))

    bound = loguru_logger.bind(component=component, **event_dict)
    if traceback:
        # rendered by format_exc_info; loguru only needs the text
        message = f"{message}\n{traceback}"
    bound.opt(depth=6).log(level, message)
    raise DropEvent


def get_logger(name: str | None = None, **initial_kw: object) -> BoundLogger:
    if not _is_configured:
        configure_logging()
    if name:
        initial_kw.setdefault("logger_name", name)
    log = structlog.get_logger(**initial_kw)
    return cast(BoundLogger, log)


__all__ = ["LoggingOptions", "configure_logging", "get_logger"]
