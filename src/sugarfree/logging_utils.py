"""Runtime logging helpers."""

from __future__ import annotations

import inspect
import logging
import os
import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "pretty"]

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_CONFIGURED_PROFILE: LogProfile | None = None


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _build_pretty_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=True,
        markup=False,
        rich_tracebacks=False,
    )


def parse_log_filter(value: str | None = None) -> tuple[str, dict[str | None, str | bool]]:
    """Parse a SUGARFREE_LOG_FILTER value (read from the environment by default).

    Format: "level" or "level,module=level,..."
    Examples:
        - "info" - global INFO level
        - "info,sugarfree.desugar=debug" - desugarer events at DEBUG
        - "debug,sugarfree.desugar.module=false" - module events disabled

    Returns:
        (global_level, module_filter_dict)
    """
    filter_env = (value if value is not None else os.getenv("SUGARFREE_LOG_FILTER", "info")).lower()
    parts = [p.strip() for p in filter_env.split(",") if p.strip()]

    filter_dict: dict[str | None, str | bool] = {}
    global_level = "info"

    for part in parts:
        if "=" in part:
            module, level = part.split("=", 1)
            module = module.strip()
            level = level.strip()
            filter_dict[module] = False if level == "false" else level.upper()
        else:
            global_level = part

    return global_level, filter_dict


def _setup_stdlib_intercept() -> None:
    """Forward stdlib logging to loguru."""
    root_logger = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root_logger.handlers):
        root_logger.addHandler(InterceptHandler())


def configure_logging(*, profile: LogProfile = "default") -> None:
    """Configure process-level logging once per profile.

    The library itself only emits DEBUG events and never configures sinks;
    embedding tools call this. Levels are controlled by SUGARFREE_LOG_FILTER
    (see `parse_log_filter`).
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    global_level, module_filter = parse_log_filter()
    # Per-module levels must be able to go below the sink's threshold.
    sink_level = "TRACE" if module_filter else global_level.upper()
    module_filter.setdefault("", global_level.upper())

    logger.remove()

    if profile == "pretty":
        logger.add(
            _build_pretty_handler(),
            level=sink_level,
            format="{message}",
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )
    else:
        logger.add(
            sys.stderr,
            level=sink_level,
            format=_DEFAULT_FORMAT,
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )

    _setup_stdlib_intercept()

    _CONFIGURED_PROFILE = profile
