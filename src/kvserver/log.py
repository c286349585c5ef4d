"""
=============================================================================
COLORED LEVEL LOGGING
=============================================================================

All server output goes through the standard ``logging`` module under the
"kvserver" namespace. This module only decides how records look on stderr:

    INFO: Waiting for the connection...
    INFO: Connection established!
    DEBUG(server): Route '/set?a=1' handled by set
    WARNING(core.connection): [3f2a9c1e] Send failed: [Errno 32] Broken pipe
    ERROR: Failed to write snapshot to store: [Errno 13] Permission denied

The level name is wrapped in a bold ANSI color:

    ┌──────────┬──────────────┐
    │ Level    │ Color        │
    ├──────────┼──────────────┤
    │ DEBUG    │ cyan         │
    │ INFO     │ white        │
    │ WARNING  │ yellow       │
    │ ERROR    │ red          │
    │ CRITICAL │ red          │
    └──────────┴──────────────┘

Records from the "kvserver" logger itself get a bare ": " prefix. Records
from child loggers carry their scope in parentheses, relative to the
package name.

=============================================================================
"""

import logging
import sys
from typing import Optional, TextIO


ROOT_LOGGER = "kvserver"

RESET = "\033[m"

LEVEL_COLORS = {
    logging.DEBUG: "\033[1;36m",     # cyan
    logging.INFO: "\033[1;37m",      # white
    logging.WARNING: "\033[1;33m",   # yellow
    logging.ERROR: "\033[1;31m",     # red
    logging.CRITICAL: "\033[1;31m",  # red
}


class ColorFormatter(logging.Formatter):
    """
    Formats records as ``LEVEL(scope): message`` with a colored level.

    Args:
        color: Wrap level names in ANSI escape codes.
        root:  Logger name that is printed without a scope.
    """

    def __init__(self, color: bool = True, root: str = ROOT_LOGGER):
        super().__init__()
        self.color = color
        self.root = root

    def level_text(self, record: logging.LogRecord) -> str:
        name = record.levelname
        if not self.color:
            return name
        code = LEVEL_COLORS.get(record.levelno)
        if code is None:
            return name
        return f"{code}{name}{RESET}"

    def scope(self, record: logging.LogRecord) -> str:
        if record.name == self.root:
            return ""
        if record.name.startswith(self.root + "."):
            return record.name[len(self.root) + 1:]
        return record.name

    def format(self, record: logging.LogRecord) -> str:
        scope = self.scope(record)
        prefix = f"({scope}): " if scope else ": "
        message = self.level_text(record) + prefix + record.getMessage()

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging(
    level: str = "INFO",
    color: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a colored stderr handler to the "kvserver" logger.

    Calling this again replaces the previous handler rather than adding a
    second one.

    Args:
        level:  DEBUG, INFO, WARNING or ERROR.
        color:  Disable for log files or terminals without ANSI support.
        stream: Defaults to sys.stderr.

    Returns:
        The configured "kvserver" logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, "_kvserver_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ColorFormatter(color=color))
    handler._kvserver_handler = True
    logger.addHandler(handler)

    # Our handler already writes to stderr; don't duplicate through root
    logger.propagate = False

    return logger
