"""Logger helpers.

Every module logs through ``get_logger(__name__)``, which places it under the
``tool_chat_lib`` logger. The library itself only attaches a ``NullHandler``;
applications call ``setup_logging`` (or configure ``logging`` themselves) to see
iterations, tool calls and failures.
"""

import logging
import sys
from typing import Optional, TextIO

_LOGGER_NAME = "tool_chat_lib"
_HANDLER_NAME = "tool_chat_lib.console"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the library logger, or a child of it.

    Module names that already start with the package name are used as-is, so
    ``get_logger(__name__)`` works inside and outside the package.
    """
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(
    level: int = logging.INFO,
    format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a console handler to the library logger.

    Calling it again only updates the level and format of the handler added the
    first time.

    Args:
        level: Logging level for the library logger.
        format_str: Log format string.
        stream: Target stream. Defaults to stdout.

    Returns:
        The library logger.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)

    handler.setFormatter(logging.Formatter(format_str))
    logger.setLevel(level)
    return logger


logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
