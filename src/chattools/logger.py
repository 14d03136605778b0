"""Verbosity-based logging for chattools.

Filtering and segmentation report what they did through a single
``chattools`` logger with two extra levels:

- ``changes`` (verbosity 1): legacy translations and stripped-code totals
- ``checks`` (verbosity 2): every stripped tag and cleared color
- ``debug`` (verbosity 3): segmentation cut points
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

CHANGES_LEVEL = 25  # between INFO and WARNING
CHECKS_LEVEL = 15  # between DEBUG and INFO

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3

_VERBOSITY_LEVELS = {
    VERBOSITY_SILENT: logging.ERROR,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}

LOGGER_NAME = "chattools"


class ChatToolsLogger(logging.Logger):
    """Logger with one method per chattools verbosity level."""

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> ChatToolsLogger:
    """Return the shared chattools logger."""
    logging.setLoggerClass(ChatToolsLogger)
    logger = logging.getLogger(LOGGER_NAME)
    assert isinstance(logger, ChatToolsLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Point the chattools logger at ``stream`` with the given verbosity.

    Reconfiguring replaces the previous handler. Unknown verbosities fall
    back to silent.

    Args:
        verbosity: One of the ``VERBOSITY_*`` constants
        stream: Output stream, sys.stderr when omitted
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_VERBOSITY_LEVELS.get(verbosity, logging.ERROR))

    # bare messages, no level prefix
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop every handler and return to silent."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def checks_enabled() -> bool:
    """Whether per-tag ``checks`` messages are emitted at the current verbosity."""
    return get_logger().isEnabledFor(CHECKS_LEVEL)
