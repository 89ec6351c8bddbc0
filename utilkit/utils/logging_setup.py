"""
Centralized logging setup using Loguru.

Library modules obtain a bound logger via get_logger() and only emit DEBUG
records describing scheduling decisions. The package disables its own records on
import; an application calls setup_logging() once to enable them and choose
where they go.
"""

import sys
from typing import Any, Optional

from loguru import logger

from utilkit.config.settings import get_settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(level: Optional[str] = None, sink: Any = sys.stderr) -> int:
    """
    Replace all loguru handlers with a single plain-format sink.

    Args:
        level: Log level name. Defaults to Settings.log_level.
        sink: Anything loguru accepts as a sink (stream, path, callable).

    Returns:
        The loguru handler id, usable with logger.remove(handler_id).
    """
    logger.remove()
    logger.enable("utilkit")

    level = (level or get_settings().log_level).upper()

    return logger.add(
        sink,
        level=level,
        format=LOG_FORMAT,
        colorize=False,
        diagnose=False,
    )


def get_logger(name: str):
    """Get a logger bound to a component name."""
    return logger.bind(component=name)
