"""
Logging for bendspline.

All package loggers hang below the ``bendspline`` logger, which does not
propagate to the root logger. Settings come from the environment:

    BENDSPLINE_LOG_LEVEL   level name, WARNING by default
    BENDSPLINE_LOG_FORMAT  "default" or "json"
    BENDSPLINE_LOG_FILE    optional file receiving a copy of every record

``profile_scope`` and ``timed`` report elapsed wall time at DEBUG level.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

PACKAGE_LOGGER = "bendspline"

LOG_LEVEL_ENV = "BENDSPLINE_LOG_LEVEL"
LOG_FORMAT_ENV = "BENDSPLINE_LOG_FORMAT"
LOG_FILE_ENV = "BENDSPLINE_LOG_FILE"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)


@dataclass
class LogSettings:
    """Resolved logging settings."""

    level: int = logging.WARNING
    format_str: str = DEFAULT_FORMAT
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "LogSettings":
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.WARNING

        fmt = JSON_FORMAT if os.environ.get(LOG_FORMAT_ENV, "").lower() == "json" else DEFAULT_FORMAT
        return cls(level=level, format_str=fmt, log_file=os.environ.get(LOG_FILE_ENV) or None)


_package_logger: Optional[logging.Logger] = None
_handlers: List[logging.Handler] = []


def _build_handlers(settings: LogSettings) -> List[logging.Handler]:
    formatter = logging.Formatter(settings.format_str)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: Optional[int] = None,
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """Configure the package logger.

    Arguments left as None fall back to the environment. Without ``force`` an
    already configured logger is returned unchanged; with it, the previous
    handlers are closed and replaced.
    """
    global _package_logger, _handlers

    if _package_logger is not None and not force:
        return _package_logger

    settings = LogSettings.from_env()
    if level is not None:
        settings.level = level
    if format_str is not None:
        settings.format_str = format_str
    if log_file is not None:
        settings.log_file = log_file

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in _handlers:
        logger.removeHandler(handler)
        handler.close()

    _handlers = _build_handlers(settings)
    for handler in _handlers:
        logger.addHandler(handler)
    logger.setLevel(settings.level)
    logger.propagate = False

    _package_logger = logger
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Package logger, or its child ``bendspline.<name>``."""
    package_logger = setup_logging()
    if not name:
        return package_logger
    return package_logger.getChild(name)


# =============================================================================
# Shorthands
# =============================================================================


def LOG_DEBUG(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().debug(msg, *args, **kwargs)


def LOG_INFO(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().info(msg, *args, **kwargs)


def LOG_WARN(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().warning(msg, *args, **kwargs)


def LOG_ERROR(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().error(msg, *args, **kwargs)


def LOG_CRITICAL(msg: str, *args: Any, **kwargs: Any) -> None:
    get_logger().critical(msg, *args, **kwargs)


# =============================================================================
# Timing
# =============================================================================


@contextmanager
def profile_scope(name: str, log_level: int = logging.DEBUG) -> Iterator[Dict[str, float]]:
    """Time the enclosed block.

    The yielded dictionary receives the elapsed seconds under ``"elapsed"``
    once the block ends.

    Example:
        with profile_scope("sampling") as timing:
            points = sample_spline(spline, 1000)
        print(timing["elapsed"])
    """
    timing: Dict[str, float] = {}
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing["elapsed"] = time.perf_counter() - start
        get_logger().log(log_level, f"{name} took {timing['elapsed']:.4f}s")


def timed(func: F) -> F:
    """Log the wall time of every call to ``func`` at DEBUG level."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with profile_scope(func.__qualname__):
            return func(*args, **kwargs)

    return wrapper  # type: ignore


setup_logging()
