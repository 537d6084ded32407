"""Process log configuration.

Routes records from the ``samm_exporter`` logger hierarchy (access
records, sampler heartbeats, errors) to stderr, one line per record.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "samm_exporter"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_HANDLER_ATTR = "_samm_exporter_handler"


def configure_logging(
    level: int | str = logging.INFO,
    stream: TextIO | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Handler:
    """Install a line-oriented stream handler on the package logger.

    Calling this again replaces the handler installed by the previous
    call instead of adding a second one.

    Args:
        level: Threshold for the package logger, as int or level name.
        stream: Destination stream (default: sys.stderr).
        fmt: logging format string.

    Returns:
        The installed handler.
    """
    if isinstance(level, str):
        level = level.upper()
    root = logging.getLogger(LOGGER_NAME)
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_ATTR, False):
            root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)
    root.setLevel(level)
    return handler
